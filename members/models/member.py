from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from shared.database import Base


class Member(Base):
    __tablename__ = "members"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    member_name: str = Column(String(100), nullable=False, index=True)
    age: int = Column(Integer, nullable=False)

    # the team_members foreign key rejects deleting a member that still has links
    team_members = relationship("TeamMember", back_populates="member", passive_deletes="all")

    def add_team(self, team):
        """
        Link this member to ``team`` through a new TeamMember.

        The link is appended to both sides so either collection sees it
        before anything is flushed. Persisting it is up to the caller.
        """
        from teams.models.team_member import TeamMember

        team_member = TeamMember()
        team_member.member = self
        team_member.team = team
        return team_member

    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, member_name={self.member_name!r}, age={self.age!r})"
