"""
Pytest configuration and shared fixtures.

The environment is set before any project import so shared.config and
shared.database build their engine against an in-memory SQLite database.
"""

import os

os.environ["SQLALCHEMY_DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def database():
    """Create every table before the test and drop them afterwards."""
    from shared.database import init_db, drop_db

    init_db()
    yield
    drop_db()


@pytest.fixture
def db_session(database):
    from shared.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database):
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_members_with_teams(db_session):
    """Store ``count`` members named Member1.. each linked to its own Team1.. team."""
    from members.models.member import Member
    from members.repositories.member_repository import MemberRepository
    from teams.models.teams import Team
    from teams.repositories.team_member_repository import TeamMemberRepository
    from teams.repositories.team_repository import TeamRepository

    def _make(count: int = 10, member_prefix: str = "Member", team_prefix: str = "Team"):
        member_repository = MemberRepository(db_session)
        team_repository = TeamRepository(db_session)
        team_member_repository = TeamMemberRepository(db_session)

        members = []
        for i in range(1, count + 1):
            member = member_repository.save(Member(member_name=f"{member_prefix}{i}", age=i))
            team = team_repository.save(Team(name=f"{team_prefix}{i}"))
            team_member_repository.save(member.add_team(team))
            members.append(member)

        db_session.commit()
        return members

    return _make
