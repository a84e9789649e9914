from pydantic import BaseModel, field_validator

from typing import List

from teams.schemas.team_members import TeamMemberResponse


class TeamResponse(BaseModel):
    id: int
    name: str
    team_members: List[TeamMemberResponse]

    model_config = {
        "from_attributes": True
    }


class TeamCreateRequest(BaseModel):
    name: str

    @field_validator('name')
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Team name must not be blank")

        return v.strip()
