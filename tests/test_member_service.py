import logging

import pytest
from sqlalchemy.orm.exc import UnmappedInstanceError

from members.models.member import Member
from members.repositories.member_repository import MemberRepository
from members.schemas.members import MemberSnapshot
from services.member_service import MemberService
from services.team_service import TeamService
from shared.exceptions import ConstraintViolation, MemberNotFound
from shared.paging import Order
from teams.models.teams import Team


@pytest.fixture
def member_service(db_session):
    return MemberService(db_session)


def test_sign_up_member_assigns_id(member_service):
    member = Member(member_name="MEMBER1", age=20)

    signed_up = member_service.sign_up_member(member)

    assert signed_up is member
    assert signed_up.id is not None


def test_find_by_id_after_sign_up_returns_equal_member(member_service, db_session):
    member_id = member_service.sign_up_member(Member(member_name="USER1", age=0)).id
    db_session.expunge_all()

    found = member_service.find_by_id(member_id)

    assert (found.id, found.member_name, found.age) == (member_id, "USER1", 0)


def test_find_by_id_absent_returns_none(member_service):
    assert member_service.find_by_id(12345) is None


def test_sign_up_member_constraint_violation_rolls_back(member_service, db_session, caplog):
    with caplog.at_level(logging.ERROR, logger="services.member_service"):
        with pytest.raises(ConstraintViolation):
            member_service.sign_up_member(Member(member_name=None, age=20))

    assert "Failed to sign up member" in caplog.text

    # the session is usable again after the rollback
    member = member_service.sign_up_member(Member(member_name="AFTER", age=1))
    assert MemberRepository(db_session).count() == 1
    assert member.id is not None


def test_find_all_by_paging(member_service, make_members_with_teams):
    make_members_with_teams(31, member_prefix="MEMBER", team_prefix="team")

    page = member_service.find_all_by_paging(3, 10)

    assert page.total_elements == 31
    assert page.total_pages == 4
    assert page.size == 10
    assert page.number == 3
    assert page.is_first is False
    assert page.is_last is True
    assert page.has_next is False


def test_find_all_by_paging_mapped_to_dto(member_service, make_members_with_teams):
    make_members_with_teams(31, member_prefix="MEMBER", team_prefix="team")

    page = member_service.find_all_by_paging(0, 10).map(MemberSnapshot.model_validate)

    assert page.total_elements == 31
    assert page.is_first is True
    assert page.has_next is True
    assert [dto.age for dto in page.content] == list(range(1, 11))


def test_find_all_by_paging_sorted(member_service, make_members_with_teams):
    make_members_with_teams(5)

    page = member_service.find_all_by_paging(0, 2, Order.desc("age"))

    assert [m.member_name for m in page.content] == ["Member5", "Member4"]


def test_member_bulk_update(member_service, db_session):
    repo = MemberRepository(db_session)
    repo.save_all([Member(member_name=f"user{i}", age=10) for i in range(31)])
    repo.save(Member(member_name="young", age=9))
    db_session.commit()

    updated = member_service.member_bulk_update(10)

    assert updated == 31
    ages = {m.member_name: m.age for m in repo.find_all()}
    assert ages.pop("young") == 9
    assert set(ages.values()) == {11}


def test_find_read_only_snapshot_does_not_persist_changes(member_service, db_session, make_members_with_teams):
    make_members_with_teams(10)
    db_session.expunge_all()

    snapshot = member_service.find_read_only_by_member_name("Member1")
    snapshot.member_name = "dddd"

    assert isinstance(snapshot, MemberSnapshot)
    with pytest.raises(UnmappedInstanceError):
        MemberRepository(db_session).save(snapshot)
    db_session.commit()
    db_session.expunge_all()

    stored = MemberRepository(db_session).find_by_id(snapshot.id)
    assert stored.member_name == "Member1"


def test_find_read_only_absent_returns_none(member_service):
    assert member_service.find_read_only_by_member_name("nobody") is None


def test_update_member_persists_changes(member_service, db_session):
    member_id = member_service.sign_up_member(Member(member_name="Member1", age=20)).id

    member_service.update_member(member_id, member_name="Member2")
    db_session.expunge_all()

    stored = member_service.find_by_id(member_id)
    assert stored.member_name == "Member2"
    assert stored.age == 20


def test_update_member_missing_raises(member_service):
    with pytest.raises(MemberNotFound) as exc_info:
        member_service.update_member(77, age=3)

    assert exc_info.value.message == "Member with id 77 not found"


def test_search_members(member_service, db_session):
    MemberRepository(db_session).save_all([
        Member(member_name="USER1", age=0),
        Member(member_name="USER2", age=1),
        Member(member_name="USER123", age=2),
    ])
    db_session.commit()

    assert [m.member_name for m in member_service.search_members(member_name="USER1")] == ["USER1"]
    assert [m.member_name for m in member_service.search_members(starts_with="USER1")] == ["USER1", "USER123"]
    assert [m.member_name for m in member_service.search_members(contains="SER2")] == ["USER2"]
    assert len(member_service.search_members()) == 3


def test_service_commit_flushes_pending_changes_on_shared_session(member_service, db_session):
    member = member_service.sign_up_member(Member(member_name="A", age=1))
    member_id = member.id
    member.age = 99

    TeamService(db_session).create_team(Team(name="t"))
    db_session.expunge_all()

    # the team commit wrote the unsaved age change along with the team
    assert member_service.find_by_id(member_id).age == 99


def test_snapshot_changes_are_not_flushed_by_later_commits(member_service, db_session):
    member_id = member_service.sign_up_member(Member(member_name="A", age=1)).id
    snapshot = member_service.find_read_only_by_member_name("A")
    snapshot.age = 99

    TeamService(db_session).create_team(Team(name="t"))
    db_session.expunge_all()

    assert member_service.find_by_id(member_id).age == 1
