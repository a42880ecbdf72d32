from datetime import datetime

import pytest

from nurse_manager.models import Task
from storage.task_repository import InMemoryTaskRepository


class FakeProvider:
    name = "fake"

    def __init__(self, response_text: str):
        self._response_text = response_text
        self.calls = []

    def generate(self, *, system: str, messages) -> str:
        self.calls.append({"system": system, "messages": list(messages)})
        return self._response_text


class FailingProvider:
    name = "failing"

    def generate(self, *, system: str, messages) -> str:
        raise RuntimeError("provider down")


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


def make_task(id: int, description: str, status: str = "pending", priority: str = "medium") -> Task:
    return Task(
        id=id,
        description=description,
        date_created=datetime(2025, 5, 1),
        status=status,
        priority=priority,
    )


@pytest.fixture
def task_repo():
    return InMemoryTaskRepository(
        [
            make_task(1, "Equipment request for Room 202"),
            make_task(2, "Staff training registration"),
            make_task(3, "Quarterly report draft", status="completed"),
            make_task(4, "Inventory check for supplies", status="overdue"),
        ]
    )
