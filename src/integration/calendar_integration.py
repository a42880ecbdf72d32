import logging
from datetime import datetime
from typing import Optional

from classification.calendar_intent import is_calendar_intent
from nurse_manager.models import CalendarEvent
from scheduling.event_builder import build_event
from storage.calendar_repository import CalendarRepository

logger = logging.getLogger(__name__)


class CalendarIntegration:
    """Creates calendar reminders out of copilot exchanges."""

    def __init__(self, repository: CalendarRepository):
        self.repository = repository

    async def process_calendar_requests(
        self, prompt: str, response_text: str, now: Optional[datetime] = None
    ) -> Optional[CalendarEvent]:
        """
        Insert at most one event for a (prompt, response) pair.

        Best effort: failures are logged and never reach the caller.
        Returns the stored event, or None when nothing was created.
        """
        try:
            if not is_calendar_intent(prompt, response_text):
                logger.info("Not a calendar request, skipping")
                return None

            event = build_event(prompt, response_text, now=now)
            stored = await self.repository.insert(event)
        except Exception as e:
            logger.error(f"Error processing calendar request: {e}")
            return None

        return stored
