import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_calendar_repository
from nurse_manager.models import CalendarEventCreate
from storage.calendar_repository import CalendarRepository

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def list_events(events: CalendarRepository = Depends(get_calendar_repository)) -> dict:
    """All events, newest event date first."""
    return {"events": [e.model_dump(mode="json") for e in await events.list_all()]}


@router.get("/upcoming")
async def upcoming_events(events: CalendarRepository = Depends(get_calendar_repository)) -> dict:
    return {"events": [e.model_dump(mode="json") for e in await events.list_upcoming()]}


@router.post("", status_code=201)
async def create_event(
    payload: CalendarEventCreate,
    events: CalendarRepository = Depends(get_calendar_repository),
) -> dict:
    event = await events.insert(payload)
    logger.info(f"Calendar event #{event.id} created manually")
    return {"event": event.model_dump(mode="json")}


@router.delete("/{event_id}")
async def delete_event(
    event_id: int,
    events: CalendarRepository = Depends(get_calendar_repository),
) -> dict:
    if not await events.delete(event_id):
        raise HTTPException(status_code=404, detail=f"Calendar event #{event_id} not found")
    return {"success": True}
