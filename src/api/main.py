import logging
import os

from fastapi import FastAPI

from api import state
from api.routers import calendar, compliance, copilot, email, followups, ops, staffing
from staffing.mock_data import FOLLOW_UP_TASKS
from storage import db
from storage.calendar_repository import PostgresCalendarRepository
from storage.conversation_store import PostgresConversationStore
from storage.task_repository import PostgresTaskRepository

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Nurse Manager API")

app.include_router(ops.router)
app.include_router(staffing.router, prefix="/api/staffing", tags=["staffing"])
app.include_router(compliance.router, prefix="/api/compliance", tags=["compliance"])
app.include_router(followups.router, prefix="/api", tags=["followups"])
app.include_router(calendar.router, prefix="/api/calendar", tags=["calendar"])
app.include_router(copilot.router, prefix="/api/copilot", tags=["copilot"])
app.include_router(email.router, prefix="/api/email", tags=["email"])


@app.on_event("startup")
async def startup() -> None:
    if not state.USE_DATABASE:
        logger.info("USE_DATABASE is off, using in-memory repositories")
        return

    await db.init_db_pool()
    await db.init_schema()

    tasks = PostgresTaskRepository()
    await tasks.seed(FOLLOW_UP_TASKS)

    state.task_repository = tasks
    state.calendar_repository = PostgresCalendarRepository()
    state.conversation_store = PostgresConversationStore()
    logger.info("Postgres repositories initialized")


@app.on_event("shutdown")
async def shutdown() -> None:
    await db.close_db_pool()
