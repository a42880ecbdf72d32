from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from nurse_manager.models import CalendarEvent, CalendarEventCreate
from storage import db

logger = logging.getLogger(__name__)


class CalendarRepository(ABC):
    @abstractmethod
    async def insert(self, event: CalendarEventCreate) -> CalendarEvent:
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> List[CalendarEvent]:
        """Newest event_date first."""
        raise NotImplementedError

    @abstractmethod
    async def list_upcoming(self, now: Optional[datetime] = None) -> List[CalendarEvent]:
        """Events at or after `now`, soonest first."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, event_id: int) -> Optional[CalendarEvent]:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, event_id: int) -> bool:
        raise NotImplementedError


class InMemoryCalendarRepository(CalendarRepository):
    def __init__(self):
        self._events: Dict[int, CalendarEvent] = {}
        self._next_id = 1

    async def insert(self, event: CalendarEventCreate) -> CalendarEvent:
        now = datetime.now()
        stored = CalendarEvent(
            id=self._next_id, created_at=now, updated_at=now, **event.model_dump()
        )
        self._events[stored.id] = stored
        self._next_id += 1
        return stored

    async def list_all(self) -> List[CalendarEvent]:
        return sorted(self._events.values(), key=lambda e: e.event_date, reverse=True)

    async def list_upcoming(self, now: Optional[datetime] = None) -> List[CalendarEvent]:
        now = now or datetime.now()
        upcoming = [e for e in self._events.values() if e.event_date >= now]
        return sorted(upcoming, key=lambda e: e.event_date)

    async def get(self, event_id: int) -> Optional[CalendarEvent]:
        return self._events.get(event_id)

    async def delete(self, event_id: int) -> bool:
        return self._events.pop(event_id, None) is not None


class PostgresCalendarRepository(CalendarRepository):
    @staticmethod
    def _from_record(record) -> CalendarEvent:
        return CalendarEvent(
            id=record["id"],
            user_id=record["user_id"],
            title=record["title"],
            description=record["description"],
            event_date=record["event_date"],
            reminder=record["reminder"],
            reminder_sent=record["reminder_sent"],
            priority=record["priority"],
            related_to=record["related_to"],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )

    async def insert(self, event: CalendarEventCreate) -> CalendarEvent:
        record = await db.fetchrow(
            """
            INSERT INTO calendar_events
                (user_id, title, description, event_date, reminder, priority, related_to)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING *
            """,
            event.user_id,
            event.title,
            event.description,
            event.event_date,
            event.reminder,
            event.priority,
            event.related_to,
        )
        logger.info(f"Inserted calendar event #{record['id']}: {event.title}")
        return self._from_record(record)

    async def list_all(self) -> List[CalendarEvent]:
        records = await db.fetch("SELECT * FROM calendar_events ORDER BY event_date DESC")
        return [self._from_record(r) for r in records]

    async def list_upcoming(self, now: Optional[datetime] = None) -> List[CalendarEvent]:
        records = await db.fetch(
            "SELECT * FROM calendar_events WHERE event_date >= $1 ORDER BY event_date",
            now or datetime.now(),
        )
        return [self._from_record(r) for r in records]

    async def get(self, event_id: int) -> Optional[CalendarEvent]:
        record = await db.fetchrow("SELECT * FROM calendar_events WHERE id = $1", event_id)
        return self._from_record(record) if record else None

    async def delete(self, event_id: int) -> bool:
        result = await db.execute("DELETE FROM calendar_events WHERE id = $1", event_id)
        return result == "DELETE 1"
