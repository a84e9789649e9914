from contextlib import asynccontextmanager

import logging

import uvicorn

from fastapi import FastAPI
from sqlalchemy import text

from members.routers import members_router
from shared.config import AUTO_CREATE_TABLES
from shared.database import SessionLocal, init_db
from shared.exceptions import NotFound, Conflict, InvalidPaging
from shared.exceptions_handler import (not_found_exception_handler, conflict_exception_handler,
                                       invalid_paging_exception_handler)
from shared.logging_config import setup_logging

from teams.routers import teams_router, team_members_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan_manager(app: FastAPI):
    setup_logging()
    if AUTO_CREATE_TABLES:
        logger.info("Lifespan: creating missing tables")
        init_db()
    else:
        logger.info("Lifespan: AUTO_CREATE_TABLES disabled, expecting alembic-managed schema")

    yield

    logger.info("Lifespan: shutdown complete")


app = FastAPI(lifespan=lifespan_manager)

app.include_router(members_router.router)

app.include_router(teams_router.router)

app.include_router(team_members_router.router)

app.add_exception_handler(NotFound, not_found_exception_handler)
app.add_exception_handler(Conflict, conflict_exception_handler)
app.add_exception_handler(InvalidPaging, invalid_paging_exception_handler)


@app.get("/health")
async def health_check():
    database_status = "reachable"
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Health check could not reach the database: %s", e)
        database_status = f"unreachable: {e}"
    finally:
        db.close()

    return {
        "service": "members_service",
        "status": "healthy_api",
        "database_status": database_status
    }

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8003, proxy_headers=True)
