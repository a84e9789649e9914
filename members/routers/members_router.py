from fastapi import APIRouter, Depends, Query, status

from typing import List, Optional

from sqlalchemy.orm import Session

from members.models.member import Member
from members.schemas.members import (BulkUpdateResponse, MemberCreateRequest, MemberResponse, MemberUpdateRequest,
                                     PageResponse)
from services.member_service import MemberService
from shared.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from shared.dependencies import get_db
from shared.exceptions import MemberNotFound
from shared.paging import Order

responses_get_member = {
    200: {"description": "Member returned."},
    404: {"description": "No member with the given id."}
}
responses_list_members = {
    200: {"description": "Page of members returned."},
    400: {"description": "Unknown sort property or direction."}
}

router = APIRouter(
    prefix="/api/v1/members",
    tags=["Members"]
)


def get_member_service(db: Session = Depends(get_db)) -> MemberService:
    return MemberService(db)


@router.post("/", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def sign_up_member(member_request: MemberCreateRequest,
                         member_service: MemberService = Depends(get_member_service)):
    """
    Sign Up Member

    Stores a new member and returns it with its generated id.

    **Example payload:**

    .. code-block:: json

       {
         "member_name": "MEMBER1",
         "age": 20
       }
    """
    member = member_service.sign_up_member(
        Member(member_name=member_request.member_name, age=member_request.age)
    )
    return MemberResponse.model_validate(member)


@router.get("/", response_model=PageResponse[MemberResponse], responses=responses_list_members)
async def list_members(page: int = Query(0, ge=0, description="Zero-based page index"),
                       size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
                       sort: Optional[List[str]] = Query(None, description="Sort as 'field' or 'field,desc'"),
                       member_service: MemberService = Depends(get_member_service)):
    """
    List Members

    Pages through members, by id unless `sort` is given. `sort` may be
    repeated, e.g. `?sort=age,desc&sort=member_name`.
    """
    orders = [Order.parse(value) for value in sort or []]
    member_page = member_service.find_all_by_paging(page, size, *orders)

    return PageResponse[MemberResponse].from_page(member_page, MemberResponse.model_validate)


@router.get("/search", response_model=List[MemberResponse])
async def search_members(name: Optional[str] = Query(None, description="Exact member name"),
                         starts_with: Optional[str] = Query(None, description="Member name prefix"),
                         contains: Optional[str] = Query(None, description="Member name fragment"),
                         member_service: MemberService = Depends(get_member_service)):
    """
    Search Members

    Only the first given filter is applied, in the order name, starts_with,
    contains. Without any filter every member is returned.
    """
    members = member_service.search_members(member_name=name, starts_with=starts_with, contains=contains)

    return [MemberResponse.model_validate(member) for member in members]


@router.post("/bulk-age-increment", response_model=BulkUpdateResponse)
async def bulk_age_increment(age: int = Query(..., description="Members aged this or older get one year added"),
                             member_service: MemberService = Depends(get_member_service)):
    updated = member_service.member_bulk_update(age)

    return BulkUpdateResponse(updated=updated)


@router.get("/{member_id}", response_model=MemberResponse, responses=responses_get_member)
async def get_member_by_id(member_id: int,
                           member_service: MemberService = Depends(get_member_service)):
    member = member_service.find_by_id(member_id)

    if not member:
        raise MemberNotFound(member_id)

    return MemberResponse.model_validate(member)


@router.patch("/{member_id}", response_model=MemberResponse, responses=responses_get_member)
async def update_member(member_id: int,
                        member_request: MemberUpdateRequest,
                        member_service: MemberService = Depends(get_member_service)):
    member = member_service.update_member(
        member_id,
        member_name=member_request.member_name,
        age=member_request.age
    )

    return MemberResponse.model_validate(member)
