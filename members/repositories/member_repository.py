import logging

from typing import Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select, text
from sqlalchemy.orm import Session, Query, joinedload, selectinload

from members.models.member import Member
from members.schemas.members import (MemberNameAge, MemberNameOnly, MemberProjection, MemberQueryDto)
from shared.exceptions import InvalidPaging
from shared.paging import DESC, Page, PageRequest, Order
from teams.models.team_member import TeamMember

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)

TOP_LIMIT = 100

FIND_BY_NAME_NATIVE_SQL = text(
    "SELECT id, member_name, age FROM members WHERE member_name = :member_name ORDER BY id"
)

MEMBER_TEAM_PROJECTION_SQL = text(
    """
    SELECT m.id AS id, m.member_name AS member_name, t.name AS team_name
    FROM members m
    LEFT JOIN team_members tm ON tm.member_id = m.id
    LEFT JOIN teams t ON t.id = tm.team_id
    ORDER BY m.id, tm.id
    LIMIT :limit OFFSET :offset
    """
)

MEMBER_TEAM_PROJECTION_COUNT_SQL = text(
    """
    SELECT count(*)
    FROM members m
    LEFT JOIN team_members tm ON tm.member_id = m.id
    """
)


class MemberRepository:
    """
    Data access for the members table.

    Lookups report absence as a value (None or an empty list) and never
    raise for it. Writes are flushed but not committed: the caller owns the
    transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    # ── CREATE / UPDATE ───────────────────────────────────

    def save(self, member: Member) -> Member:
        self.db.add(member)
        self.db.flush()
        return member

    def save_all(self, members: Iterable[Member]) -> List[Member]:
        members = list(members)
        self.db.add_all(members)
        self.db.flush()
        return members

    def bulk_increment_age(self, age: int) -> int:
        """
        Add one to the age of every member aged ``age`` or more, in a single UPDATE.

        The statement bypasses the session's identity map, so every instance
        the session holds is expired afterwards and reloads on next access.
        """
        self.db.flush()
        updated = (
            self.db.query(Member)
            .filter(Member.age >= age)
            .update({Member.age: Member.age + 1}, synchronize_session=False)
        )
        self.db.expire_all()
        logger.debug("Bulk age increment for age >= %s touched %s rows", age, updated)
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete(self, member: Member) -> None:
        self.db.delete(member)
        self.db.flush()

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, member_id: int) -> Optional[Member]:
        return self.db.get(Member, member_id)

    def find_all(self) -> List[Member]:
        return self.db.query(Member).order_by(Member.id).all()

    def find_all_paged(self, page_request: PageRequest) -> Page[Member]:
        return self._page(self.db.query(Member), page_request)

    def count(self) -> int:
        return self.db.query(Member).count()

    def find_by_member_name(self, member_name: str) -> Optional[Member]:
        """Exact-name lookup; raises MultipleResultsFound if the name is not unique."""
        return self.db.query(Member).filter(Member.member_name == member_name).one_or_none()

    def find_all_by_member_name(self, member_name: str) -> List[Member]:
        return (
            self.db.query(Member)
            .filter(Member.member_name == member_name)
            .order_by(Member.id)
            .all()
        )

    def find_all_member_names(self) -> List[str]:
        return list(self.db.scalars(select(Member.member_name).order_by(Member.id)))

    def find_by_member_name_starting_with(self, prefix: str) -> List[Member]:
        return (
            self.db.query(Member)
            .filter(Member.member_name.startswith(prefix, autoescape=True))
            .order_by(Member.id)
            .all()
        )

    def find_by_member_name_containing(self, fragment: str) -> List[Member]:
        return (
            self.db.query(Member)
            .filter(Member.member_name.contains(fragment, autoescape=True))
            .order_by(Member.id)
            .all()
        )

    def find_by_member_name_and_age_greater_than(self, member_name: str, age: int) -> List[Member]:
        return (
            self.db.query(Member)
            .filter(Member.member_name == member_name, Member.age > age)
            .order_by(Member.id)
            .all()
        )

    def find_all_by_age(self, age: int) -> List[Member]:
        return self.db.query(Member).filter(Member.age == age).order_by(Member.id).all()

    def find_top100(self) -> List[Member]:
        return self.db.query(Member).order_by(Member.id).limit(TOP_LIMIT).all()

    def find_by_age_greater_than_equal(self, age: int, page_request: PageRequest) -> Page[Member]:
        return self._page(self.db.query(Member).filter(Member.age >= age), page_request)

    # ── NATIVE SQL ────────────────────────────────────────

    def find_member_by_native_query(self, member_name: str) -> List[Member]:
        stmt = select(Member).from_statement(FIND_BY_NAME_NATIVE_SQL)
        return list(self.db.scalars(stmt, {"member_name": member_name}))

    def find_by_paging_native_projection(self, page_request: PageRequest) -> Page[MemberProjection]:
        """
        Page over members left-joined to their teams with hand-written SQL.

        A member with several teams yields one row per team, and a member
        with none yields one row whose team_name is None. The total counts
        rows of the same join.
        """
        total = self.db.execute(MEMBER_TEAM_PROJECTION_COUNT_SQL).scalar_one()
        rows = self.db.execute(
            MEMBER_TEAM_PROJECTION_SQL,
            {"limit": page_request.size, "offset": page_request.offset},
        ).mappings().all()

        return Page([MemberProjection.model_validate(dict(row)) for row in rows], page_request, total)

    # ── PROJECTIONS ───────────────────────────────────────

    def find_members_by_team_id(self, team_id: int) -> List[MemberQueryDto]:
        rows = (
            self.db.query(Member.id, Member.member_name, Member.age)
            .join(TeamMember, TeamMember.member_id == Member.id)
            .filter(TeamMember.team_id == team_id)
            .order_by(TeamMember.id)
            .all()
        )
        return [MemberQueryDto(id=row.id, member_name=row.member_name, age=row.age) for row in rows]

    def find_name_only_by_member_name_containing(self, fragment: str) -> List[MemberNameOnly]:
        return self.find_projection_by_member_name_containing(fragment, MemberNameOnly)

    def find_name_and_age_by_member_name_containing(self, fragment: str) -> List[MemberNameAge]:
        return self.find_projection_by_member_name_containing(fragment, MemberNameAge)

    def find_projection_by_member_name_containing(self, fragment: str, projection_type: Type[P]) -> List[P]:
        """
        Substring lookup returning ``projection_type`` instead of entities.

        Flat projections (every field is a members column) select only those
        columns. Anything else, such as a projection reaching into
        team_members, loads the members with their teams and validates from
        the entities.
        """
        criteria = Member.member_name.contains(fragment, autoescape=True)
        column_names = set(Member.__table__.columns.keys())
        field_names = list(projection_type.model_fields)

        if field_names and all(name in column_names for name in field_names):
            rows = (
                self.db.query(*[getattr(Member, name) for name in field_names])
                .filter(criteria)
                .order_by(Member.id)
                .all()
            )
            return [projection_type.model_validate(dict(row._mapping)) for row in rows]

        members = (
            self.db.query(Member)
            .options(selectinload(Member.team_members).joinedload(TeamMember.team))
            .filter(criteria)
            .order_by(Member.id)
            .all()
        )
        return [projection_type.model_validate(member) for member in members]

    # ── EAGER LOADING ─────────────────────────────────────

    def find_member_fetch_join(self) -> List[Member]:
        return (
            self.db.query(Member)
            .options(joinedload(Member.team_members).joinedload(TeamMember.team))
            .order_by(Member.id)
            .all()
        )

    def find_all_with_teams(self) -> List[Member]:
        return (
            self.db.query(Member)
            .options(selectinload(Member.team_members).selectinload(TeamMember.team))
            .order_by(Member.id)
            .all()
        )

    # ── HELPERS ───────────────────────────────────────────

    def _page(self, query: Query, page_request: PageRequest) -> Page[Member]:
        total = query.order_by(None).count()
        content = (
            self._apply_sort(query, page_request.sort)
            .offset(page_request.offset)
            .limit(page_request.size)
            .all()
        )
        return Page(content, page_request, total)

    @staticmethod
    def _apply_sort(query: Query, orders: Iterable[Order]) -> Query:
        column_names = Member.__table__.columns.keys()
        clauses = []
        for order in orders:
            if order.property not in column_names:
                raise InvalidPaging(f"No property '{order.property}' found for type Member")
            column = getattr(Member, order.property)
            clauses.append(column.desc() if order.direction == DESC else column.asc())

        # id last keeps page boundaries stable when the requested keys tie
        clauses.append(Member.id.asc())
        return query.order_by(*clauses)
