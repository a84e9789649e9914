from sqlalchemy import Column, Integer, String

from sqlalchemy.orm import relationship

from shared.database import Base

from teams.models.team_member import TeamMember


class Team(Base):
    __tablename__ = "teams"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(100), nullable=False)

    team_members = relationship(TeamMember, back_populates="team", passive_deletes="all")

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, name={self.name!r})"
