from fastapi import APIRouter, Depends, status

from typing import List

from sqlalchemy.orm import Session

from members.schemas.members import MemberQueryDto
from services.member_service import MemberService
from services.team_service import TeamService
from shared.dependencies import get_db
from shared.exceptions import TeamNotFound
from teams.schemas.team_members import TeamMemberCreateRequest, TeamMemberDeleteResponse, TeamMemberResponse

responses_get_members = {
    200: {"description": "Members of the team returned."},
    404: {"description": "No team with the given id."}
}
responses_add_member = {
    201: {"description": "Member linked to the team."},
    404: {"description": "The team or the member does not exist."}
}
responses_remove_member = {
    200: {"description": "Every link between the member and the team was removed."},
    404: {"description": "The team does not exist or the member is not in it."}
}

router = APIRouter(
    prefix="/api/v1/teams/{team_id}/members",
    tags=["Team Members"]
)


@router.get("/", response_model=List[MemberQueryDto], responses=responses_get_members)
async def get_team_members_by_team_id(team_id: int,
                                      db: Session = Depends(get_db)):
    """
    Get Team Members By Team Id

    Lists the id, name and age of every member linked to the team.

    **Example response:**

    .. code-block:: json

       [
         {"id": 1, "member_name": "MEMBER1", "age": 20},
         {"id": 2, "member_name": "MEMBER2", "age": 21}
       ]
    """
    if TeamService(db).find_by_id(team_id) is None:
        raise TeamNotFound()

    return MemberService(db).find_members_by_team_id(team_id)


@router.post("/", response_model=TeamMemberResponse, responses=responses_add_member,
             status_code=status.HTTP_201_CREATED)
async def add_team_member_to_team(team_id: int,
                                  team_member_request: TeamMemberCreateRequest,
                                  db: Session = Depends(get_db)):
    """
    Add Team Member To Team

    Links an existing member to an existing team. Linking the same member
    twice stores a second link.

    **Example payload:**

    .. code-block:: json

       {
         "member_id": 1
       }
    """
    team_member = TeamService(db).add_member_to_team(team_id, team_member_request.member_id)

    return TeamMemberResponse.model_validate(team_member)


@router.delete("/{member_id}", response_model=TeamMemberDeleteResponse, responses=responses_remove_member)
async def remove_team_member_from_team(team_id: int,
                                       member_id: int,
                                       db: Session = Depends(get_db)):
    removed = TeamService(db).remove_member_from_team(team_id, member_id)

    return TeamMemberDeleteResponse(
        message="Member removed from team.",
        removed=removed
    )
