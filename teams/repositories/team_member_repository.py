from typing import List, Optional

from sqlalchemy.orm import Session

from teams.models.team_member import TeamMember


class TeamMemberRepository:
    """
    Data access for team_members, the join rows between members and teams.

    The same (member, team) pair may be stored more than once, which is why
    the pair lookup returns a list.
    """

    def __init__(self, db: Session):
        self.db = db

    def save(self, team_member: TeamMember) -> TeamMember:
        self.db.add(team_member)
        self.db.flush()
        return team_member

    def find_by_id(self, team_member_id: int) -> Optional[TeamMember]:
        return self.db.get(TeamMember, team_member_id)

    def find_all_by_member_id(self, member_id: int) -> List[TeamMember]:
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.member_id == member_id)
            .order_by(TeamMember.id)
            .all()
        )

    def find_all_by_team_id(self, team_id: int) -> List[TeamMember]:
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.team_id == team_id)
            .order_by(TeamMember.id)
            .all()
        )

    def find_by_member_and_team(self, member_id: int, team_id: int) -> List[TeamMember]:
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.member_id == member_id, TeamMember.team_id == team_id)
            .order_by(TeamMember.id)
            .all()
        )

    def delete(self, team_member: TeamMember) -> None:
        member, team = team_member.member, team_member.team
        self.db.delete(team_member)
        self.db.flush()

        # collections loaded before the delete still hold the row
        for owner in (member, team):
            if owner is not None:
                self.db.expire(owner, ["team_members"])
