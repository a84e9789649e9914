from fastapi import APIRouter, Depends, status

from sqlalchemy.orm import Session

from shared.dependencies import get_db
from shared.exceptions import TeamNotFound
from services.team_service import TeamService
from teams.models.teams import Team
from teams.schemas.teams import TeamResponse, TeamCreateRequest

import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/teams",
    tags=["Teams"]
)


def get_team_service(db: Session = Depends(get_db)) -> TeamService:
    return TeamService(db)


@router.post("/", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
async def create_team(team_request: TeamCreateRequest,
                      team_service: TeamService = Depends(get_team_service)):
    """
    Create Team

    Stores a new, empty team. Members are linked afterwards through
    `POST /api/v1/teams/{team_id}/members/`.

    **Example payload:**

    .. code-block:: json

       {
         "name": "team 1"
       }

    **Example response (201 Created):**

    .. code-block:: json

       {
         "id": 1,
         "name": "team 1",
         "team_members": []
       }
    """
    team = team_service.create_team(Team(name=team_request.name))

    return TeamResponse.model_validate(team)


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team_by_id(team_id: int,
                         team_service: TeamService = Depends(get_team_service)):
    team = team_service.find_by_id(team_id)

    if not team:
        logger.info("Team %s requested but not found", team_id)
        raise TeamNotFound()

    return TeamResponse.model_validate(team)
