import logging

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from members.models.member import Member
from members.repositories.member_repository import MemberRepository
from members.schemas.members import MemberQueryDto, MemberSnapshot
from shared.exceptions import ConstraintViolation, MemberNotFound
from shared.paging import Order, Page, PageRequest

logger = logging.getLogger(__name__)


class MemberService:
    """
    Member use cases. Each public method is one transaction: writes are
    committed at the end, and any failure rolls the whole method back.
    """

    def __init__(self, db: Session):
        self.db = db
        self.member_repository = MemberRepository(db)

    def sign_up_member(self, member: Member) -> Member:
        try:
            self.member_repository.save(member)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error("Failed to sign up member %r: %s", member.member_name, e.orig)
            raise ConstraintViolation(f"Member could not be stored: {e.orig}") from e
        except Exception:
            self.db.rollback()
            logger.exception("Unexpected error while signing up member %r", member.member_name)
            raise

        self.db.refresh(member)
        logger.info("Signed up member id=%s name=%r", member.id, member.member_name)
        return member

    def find_by_id(self, member_id: int) -> Optional[Member]:
        return self.member_repository.find_by_id(member_id)

    def find_all_by_paging(self, page_index: int, page_size: int, *orders: Order) -> Page[Member]:
        return self.member_repository.find_all_paged(PageRequest.of(page_index, page_size, *orders))

    def member_bulk_update(self, age: int) -> int:
        try:
            updated = self.member_repository.bulk_increment_age(age)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Bulk age update for age >= %s failed", age)
            raise

        logger.info("Bulk age update for age >= %s changed %s members", age, updated)
        return updated

    def find_read_only_by_member_name(self, member_name: str) -> Optional[MemberSnapshot]:
        member = self.member_repository.find_by_member_name(member_name)
        if member is None:
            return None
        return MemberSnapshot.model_validate(member)

    def update_member(self, member_id: int, member_name: Optional[str] = None,
                      age: Optional[int] = None) -> Member:
        member = self.member_repository.find_by_id(member_id)
        if member is None:
            raise MemberNotFound(member_id)

        if member_name is not None:
            member.member_name = member_name
        if age is not None:
            member.age = age

        try:
            self.member_repository.save(member)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error("Failed to update member id=%s: %s", member_id, e.orig)
            raise ConstraintViolation(f"Member could not be stored: {e.orig}") from e
        except Exception:
            self.db.rollback()
            logger.exception("Unexpected error while updating member id=%s", member_id)
            raise

        self.db.refresh(member)
        logger.info("Updated member id=%s", member_id)
        return member

    def find_members_by_team_id(self, team_id: int) -> List[MemberQueryDto]:
        return self.member_repository.find_members_by_team_id(team_id)

    def search_members(self, member_name: Optional[str] = None, starts_with: Optional[str] = None,
                       contains: Optional[str] = None) -> List[Member]:
        if member_name is not None:
            return self.member_repository.find_all_by_member_name(member_name)
        if starts_with is not None:
            return self.member_repository.find_by_member_name_starting_with(starts_with)
        if contains is not None:
            return self.member_repository.find_by_member_name_containing(contains)
        return self.member_repository.find_all()
