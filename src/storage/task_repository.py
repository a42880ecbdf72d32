from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from nurse_manager.models import Task, TaskCreate, TaskStatus
from storage import db

logger = logging.getLogger(__name__)

# Columns callers may change through update().
UPDATABLE_FIELDS = (
    "description",
    "status",
    "priority",
    "assigned_to",
    "completed_at",
    "completed_by",
    "completion_notes",
)


class TaskRepository(ABC):
    @abstractmethod
    async def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_status(self, status: TaskStatus) -> List[Task]:
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> List[Task]:
        """All tasks, oldest first."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, task: TaskCreate) -> Task:
        raise NotImplementedError

    @abstractmethod
    async def update(self, task_id: int, fields: Dict[str, Any]) -> Optional[Task]:
        raise NotImplementedError

    @abstractmethod
    async def complete(
        self, task_id: int, notes: str = "", user_id: int = 1
    ) -> Optional[Task]:
        """
        Move a task to 'completed' in a single conditional write.

        Returns None when the task does not exist or was already completed,
        so two concurrent completions of the same task cannot both succeed.
        """
        raise NotImplementedError


def _check_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update task fields: {sorted(unknown)}")
    return fields


class InMemoryTaskRepository(TaskRepository):
    """Dict-backed repository for tests and database-less runs."""

    def __init__(self, tasks: Iterable[Task] = ()):
        self._tasks: Dict[int, Task] = {}
        for t in tasks:
            self._tasks[t.id] = t.model_copy(deep=True)
        self._next_id = max(self._tasks, default=0) + 1

    @classmethod
    def seeded(cls) -> "InMemoryTaskRepository":
        from staffing.mock_data import FOLLOW_UP_TASKS

        return cls(FOLLOW_UP_TASKS)

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        task = self._tasks.get(task_id)
        return task.model_copy() if task else None

    async def get_by_status(self, status: TaskStatus) -> List[Task]:
        return [t.model_copy() for t in self._tasks.values() if t.status == status]

    async def list_all(self) -> List[Task]:
        return [t.model_copy() for t in sorted(self._tasks.values(), key=lambda t: t.date_created)]

    async def create(self, task: TaskCreate) -> Task:
        new_task = Task(id=self._next_id, **task.model_dump())
        self._tasks[new_task.id] = new_task
        self._next_id += 1
        return new_task.model_copy()

    async def update(self, task_id: int, fields: Dict[str, Any]) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None:
            return None
        updated = task.model_copy(update=_check_fields(fields))
        self._tasks[task_id] = updated
        return updated.model_copy()

    async def complete(
        self, task_id: int, notes: str = "", user_id: int = 1
    ) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None or task.status == "completed":
            return None
        return await self.update(
            task_id,
            {
                "status": "completed",
                "completed_at": datetime.now(),
                "completed_by": user_id,
                "completion_notes": notes,
            },
        )


class PostgresTaskRepository(TaskRepository):
    """follow_up_tasks table through the shared asyncpg pool."""

    @staticmethod
    def _from_record(record) -> Task:
        return Task(
            id=record["id"],
            description=record["description"],
            date_created=record["date_created"],
            status=record["status"],
            priority=record["priority"],
            assigned_to=record["assigned_to"],
            completed_at=record["completed_at"],
            completed_by=record["completed_by"],
            completion_notes=record["completion_notes"],
        )

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        record = await db.fetchrow("SELECT * FROM follow_up_tasks WHERE id = $1", task_id)
        return self._from_record(record) if record else None

    async def get_by_status(self, status: TaskStatus) -> List[Task]:
        records = await db.fetch(
            "SELECT * FROM follow_up_tasks WHERE status = $1 ORDER BY date_created",
            status,
        )
        return [self._from_record(r) for r in records]

    async def list_all(self) -> List[Task]:
        records = await db.fetch("SELECT * FROM follow_up_tasks ORDER BY date_created")
        return [self._from_record(r) for r in records]

    async def create(self, task: TaskCreate) -> Task:
        record = await db.fetchrow(
            """
            INSERT INTO follow_up_tasks (description, status, priority, assigned_to)
            VALUES ($1, $2, $3, $4)
            RETURNING *
            """,
            task.description,
            task.status,
            task.priority,
            task.assigned_to,
        )
        logger.info(f"Created task #{record['id']}")
        return self._from_record(record)

    async def update(self, task_id: int, fields: Dict[str, Any]) -> Optional[Task]:
        fields = _check_fields(fields)
        if not fields:
            return await self.get_by_id(task_id)

        columns = list(fields)
        assignments = ", ".join(f"{col} = ${i + 2}" for i, col in enumerate(columns))
        record = await db.fetchrow(
            f"UPDATE follow_up_tasks SET {assignments} WHERE id = $1 RETURNING *",
            task_id,
            *[fields[c] for c in columns],
        )
        return self._from_record(record) if record else None

    async def complete(
        self, task_id: int, notes: str = "", user_id: int = 1
    ) -> Optional[Task]:
        record = await db.fetchrow(
            """
            UPDATE follow_up_tasks
            SET status = 'completed',
                completed_at = NOW(),
                completed_by = $2,
                completion_notes = $3
            WHERE id = $1 AND status <> 'completed'
            RETURNING *
            """,
            task_id,
            user_id,
            notes,
        )
        if record is None:
            logger.warning(f"Task #{task_id} not completed (missing or already completed)")
            return None
        return self._from_record(record)

    async def seed(self, tasks: Iterable[Task]) -> int:
        """Insert seed tasks when the table is empty. Returns rows inserted."""
        rows = [(t.description, t.date_created, t.status, t.priority) for t in tasks]
        async with db.transaction() as conn:
            if await conn.fetchval("SELECT COUNT(*) FROM follow_up_tasks"):
                return 0
            await conn.executemany(
                """
                INSERT INTO follow_up_tasks (description, date_created, status, priority)
                VALUES ($1, $2, $3, $4)
                """,
                rows,
            )
        count = len(rows)
        logger.info(f"Seeded {count} follow-up tasks")
        return count
