from datetime import datetime

import pytest
from pydantic import ValidationError

from nurse_manager.models import (
    CalendarEvent,
    CalendarEventCreate,
    CompletionResult,
    Task,
    TaskCreate,
    TaskReference,
)


def test_task_defaults():
    task = Task(id=1, description="Check crash cart")
    assert task.status == "pending"
    assert task.priority == "medium"
    assert task.completed_at is None


def test_task_id_must_be_positive():
    with pytest.raises(ValidationError):
        Task(id=0, description="x")


def test_task_status_is_constrained():
    with pytest.raises(ValidationError):
        Task(id=1, description="x", status="archived")


def test_task_create_strips_description():
    assert TaskCreate(description="  Call pharmacy  ").description == "Call pharmacy"
    with pytest.raises(ValidationError):
        TaskCreate(description="   ")


def test_task_reference_emptiness():
    assert TaskReference().is_empty
    assert not TaskReference(id=0).is_empty
    assert not TaskReference(description="equipment request").is_empty


def test_completion_result_outcome_is_constrained():
    with pytest.raises(ValidationError):
        CompletionResult(success=False, message="x", outcome="maybe")


def test_calendar_event_defaults():
    event = CalendarEvent(
        id=1,
        **CalendarEventCreate(title="Check in with Sarah", event_date=datetime(2025, 5, 31)).model_dump(),
    )
    assert event.reminder is True
    assert event.reminder_sent is False
    assert event.user_id == 1
    assert event.priority == "medium"


def test_event_date_is_stored_naive():
    event = CalendarEventCreate(title="Audit", event_date="2099-01-10T09:00:00+00:00")
    assert event.event_date.tzinfo is None
