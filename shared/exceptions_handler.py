from shared.exceptions import NotFound, Conflict, InvalidPaging

from fastapi import Request
from fastapi.responses import JSONResponse


async def not_found_exception_handler(request: Request, exc: NotFound):
    return JSONResponse(
        status_code=404,
        content={
            "message": exc.message
        },
    )


async def conflict_exception_handler(request: Request, exc: Conflict):
    return JSONResponse(
        status_code=409,
        content={
            "message": exc.name or "The operation could not be completed because the resource is in a conflicting state."
        },
    )


async def invalid_paging_exception_handler(request: Request, exc: InvalidPaging):
    return JSONResponse(
        status_code=400,
        content={
            "message": str(exc)
        },
    )
