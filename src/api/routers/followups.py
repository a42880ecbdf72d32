import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from api.dependencies import get_orchestrator, get_task_repository
from api.metrics import REQUEST_LATENCY_SECONDS, REQUESTS_TOTAL, TASK_COMPLETIONS_TOTAL
from completion.task_completion import DEFAULT_USER_ID, TaskCompletionOrchestrator
from nurse_manager.models import TaskCreate
from storage.task_repository import TaskRepository

router = APIRouter()
logger = logging.getLogger(__name__)

DASHBOARD_NOTES = "Marked as complete via dashboard"


class CompleteTaskIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    notes: Optional[str] = None
    user_id: int = Field(DEFAULT_USER_ID, alias="userId")


class CompleteFromTextIn(BaseModel):
    prompt: str


@router.get("/followups")
async def list_followups(tasks: TaskRepository = Depends(get_task_repository)) -> dict:
    """Open follow-up tasks (pending and overdue)."""
    open_tasks = [t for t in await tasks.list_all() if t.status != "completed"]
    return {
        "count": len(open_tasks),
        "overdue": sum(1 for t in open_tasks if t.status == "overdue"),
        "items": [
            {"id": t.id, "description": t.description, "status": t.status, "priority": t.priority}
            for t in open_tasks
        ],
    }


@router.post("/followups", status_code=201)
async def create_followup(
    payload: TaskCreate,
    tasks: TaskRepository = Depends(get_task_repository),
) -> dict:
    task = await tasks.create(payload)
    logger.info(f"Follow-up task #{task.id} created")
    return {"task": task.model_dump(mode="json")}


@router.post("/followups/{task_id}/complete")
async def complete_followup(
    task_id: int,
    payload: Optional[CompleteTaskIn] = None,
    tasks: TaskRepository = Depends(get_task_repository),
) -> dict:
    """Mark a task complete by id from the dashboard."""
    payload = payload or CompleteTaskIn()
    logger.info(f"Attempting to mark task #{task_id} as complete")

    task = await tasks.get_by_id(task_id)
    if task is None:
        TASK_COMPLETIONS_TOTAL.labels(outcome="not_found").inc()
        raise HTTPException(status_code=404, detail=f"Task #{task_id} not found.")

    completed = None
    if task.status != "completed":
        completed = await tasks.complete(
            task_id, payload.notes or DASHBOARD_NOTES, payload.user_id
        )
    if completed is None:
        TASK_COMPLETIONS_TOTAL.labels(outcome="already_completed").inc()
        raise HTTPException(
            status_code=400, detail=f"Task #{task_id} is already marked as complete."
        )

    TASK_COMPLETIONS_TOTAL.labels(outcome="completed").inc()
    return {
        "success": True,
        "message": f"Successfully marked task #{task_id} as complete.",
        "task": completed.model_dump(mode="json"),
    }


@router.post("/followups/complete-from-text")
async def complete_from_text(
    payload: CompleteFromTextIn,
    orchestrator: TaskCompletionOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Resolve a free-text completion request, e.g. "mark task #3 as done"."""
    start = time.time()
    result = await orchestrator.process_task_completion_request(payload.prompt)

    TASK_COMPLETIONS_TOTAL.labels(outcome=result.outcome).inc()
    REQUESTS_TOTAL.labels(endpoint="/api/followups/complete-from-text", status=result.outcome).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint="/api/followups/complete-from-text").observe(
        time.time() - start
    )
    return result.model_dump(mode="json")
