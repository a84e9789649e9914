from pydantic import BaseModel, Field

from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class MemberCreateRequest(BaseModel):
    member_name: str = Field(min_length=1, max_length=100)
    age: int = Field(ge=0)


class MemberUpdateRequest(BaseModel):
    member_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    age: Optional[int] = Field(default=None, ge=0)


class MemberResponse(BaseModel):
    id: int
    member_name: str
    age: int

    model_config = {
        "from_attributes": True
    }


class MemberSnapshot(BaseModel):
    """
    Detached copy of a Member.

    It is not mapped and keeps no reference to the session, so changing it
    never reaches the database.
    """
    id: int
    member_name: str
    age: int

    model_config = {
        "from_attributes": True
    }


class MemberQueryDto(BaseModel):
    id: int
    member_name: str
    age: int

    model_config = {
        "from_attributes": True
    }


class MemberNameOnly(BaseModel):
    member_name: str

    model_config = {
        "from_attributes": True
    }


class MemberNameAge(BaseModel):
    member_name: str
    age: int

    model_config = {
        "from_attributes": True
    }


class TeamNameOnly(BaseModel):
    name: str

    model_config = {
        "from_attributes": True
    }


class TeamMemberTeamOnly(BaseModel):
    team: TeamNameOnly

    model_config = {
        "from_attributes": True
    }


class NestedMemberProjection(BaseModel):
    member_name: str
    team_members: List[TeamMemberTeamOnly]

    model_config = {
        "from_attributes": True
    }


class MemberProjection(BaseModel):
    """Row shape of the hand-written members/teams join: column aliases id, member_name, team_name."""
    id: int
    member_name: str
    team_name: Optional[str] = None


class BulkUpdateResponse(BaseModel):
    updated: int


class PageResponse(BaseModel, Generic[T]):
    content: List[T]
    total_elements: int
    total_pages: int
    size: int
    number: int
    number_of_elements: int
    is_first: bool
    is_last: bool
    has_next: bool

    @classmethod
    def from_page(cls, page, converter=None):
        content = page.content if converter is None else [converter(item) for item in page.content]
        return cls(
            content=content,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            size=page.size,
            number=page.number,
            number_of_elements=page.number_of_elements,
            is_first=page.is_first,
            is_last=page.is_last,
            has_next=page.has_next,
        )
