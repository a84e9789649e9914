import logging

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from members.repositories.member_repository import MemberRepository
from shared.exceptions import ConstraintViolation, MemberNotFound, NotFound, TeamNotFound
from teams.models.team_member import TeamMember
from teams.models.teams import Team
from teams.repositories.team_member_repository import TeamMemberRepository
from teams.repositories.team_repository import TeamRepository

logger = logging.getLogger(__name__)


class TeamService:
    """Team use cases; one transaction per public method, as in MemberService."""

    def __init__(self, db: Session):
        self.db = db
        self.team_repository = TeamRepository(db)
        self.member_repository = MemberRepository(db)
        self.team_member_repository = TeamMemberRepository(db)

    def create_team(self, team: Team) -> Team:
        try:
            self.team_repository.save(team)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error("Failed to create team %r: %s", team.name, e.orig)
            raise ConstraintViolation(f"Team could not be stored: {e.orig}") from e
        except Exception:
            self.db.rollback()
            logger.exception("Unexpected error while creating team %r", team.name)
            raise

        self.db.refresh(team)
        logger.info("Created team id=%s name=%r", team.id, team.name)
        return team

    def find_by_id(self, team_id: int) -> Optional[Team]:
        return self.team_repository.find_by_id(team_id)

    def add_member_to_team(self, team_id: int, member_id: int) -> TeamMember:
        """
        Link an existing member to an existing team.

        The team is resolved first, so a request where both ids are bad
        reports TeamNotFound. The (member, team) pair is not required to be new.
        """
        team = self.team_repository.find_by_id(team_id)
        if team is None:
            raise TeamNotFound()

        member = self.member_repository.find_by_id(member_id)
        if member is None:
            raise MemberNotFound(member_id)

        try:
            team_member = self.team_member_repository.save(member.add_team(team))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error("Failed to add member %s to team %s: %s", member_id, team_id, e.orig)
            raise ConstraintViolation(f"Team membership could not be stored: {e.orig}") from e
        except Exception:
            self.db.rollback()
            logger.exception("Unexpected error while adding member %s to team %s", member_id, team_id)
            raise

        self.db.refresh(team_member)
        logger.info("Added member %s to team %s (team_member id=%s)", member_id, team_id, team_member.id)
        return team_member

    def remove_member_from_team(self, team_id: int, member_id: int) -> int:
        team = self.team_repository.find_by_id(team_id)
        if team is None:
            raise TeamNotFound()

        links = self.team_member_repository.find_by_member_and_team(member_id, team_id)
        if not links:
            raise NotFound("Team membership")

        try:
            for link in links:
                self.team_member_repository.delete(link)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to remove member %s from team %s", member_id, team_id)
            raise

        logger.info("Removed member %s from team %s (%s links)", member_id, team_id, len(links))
        return len(links)
