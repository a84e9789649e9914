from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from shared.database import Base


class TeamMember(Base):
    __tablename__ = 'team_members'

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    member_id: int = Column(Integer, ForeignKey('members.id', name="fk_team_members_member_id"), nullable=False)
    team_id: int = Column(Integer, ForeignKey('teams.id', name="fk_team_members_team_id"), nullable=False)

    member = relationship("Member", back_populates="team_members")
    team = relationship("Team", back_populates="team_members")

    def __repr__(self) -> str:
        return f"TeamMember(id={self.id!r}, member_id={self.member_id!r}, team_id={self.team_id!r})"
