from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from teams.models.teams import Team


class TeamRepository:
    """Data access for the teams table. Writes are flushed, never committed."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, team: Team) -> Team:
        self.db.add(team)
        self.db.flush()
        return team

    def save_all(self, teams: Iterable[Team]) -> List[Team]:
        teams = list(teams)
        self.db.add_all(teams)
        self.db.flush()
        return teams

    def find_by_id(self, team_id: int) -> Optional[Team]:
        return self.db.get(Team, team_id)

    def find_all(self) -> List[Team]:
        return self.db.query(Team).order_by(Team.id).all()

    def count(self) -> int:
        return self.db.query(Team).count()

    def delete(self, team: Team) -> None:
        self.db.delete(team)
        self.db.flush()
