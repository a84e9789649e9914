from pydantic import BaseModel


class TeamMemberResponse(BaseModel):
    id: int
    member_id: int
    team_id: int

    model_config = {
        "from_attributes": True
    }


class TeamMemberCreateRequest(BaseModel):
    member_id: int


class TeamMemberDeleteResponse(BaseModel):
    message: str
    removed: int
