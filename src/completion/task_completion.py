from __future__ import annotations

import logging
import os
from typing import List

from classification.completion_intent import is_completion_intent
from extraction.task_reference import extract_reference
from nurse_manager.models import CompletionResult, Task
from storage.task_repository import TaskRepository

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = int(os.getenv("DEFAULT_USER_ID", "1"))


def matching_tasks(tasks: List[Task], phrase: str) -> List[Task]:
    """Tasks whose description contains the phrase or is contained in it (case-insensitive)."""
    needle = phrase.lower()
    return [
        t for t in tasks
        if needle in t.description.lower() or t.description.lower() in needle
    ]


class TaskCompletionOrchestrator:
    """
    Turns a free-text prompt into at most one task completion.

    Every failure path returns a CompletionResult without writing anything.
    Storage errors are not caught here.
    """

    def __init__(self, tasks: TaskRepository, user_id: int = DEFAULT_USER_ID):
        self.tasks = tasks
        self.user_id = user_id

    async def resolve_and_complete(self, prompt: str) -> CompletionResult:
        if not is_completion_intent(prompt):
            logger.info("Not a task completion request")
            return CompletionResult(
                success=False,
                message="Not a task completion request",
                outcome="not_a_request",
            )

        reference = extract_reference(prompt)
        logger.info(
            f"Extracted task reference - id: {reference.id}, description: {reference.description}"
        )

        if reference.id is not None:
            return await self._complete_by_id(reference.id, prompt)

        if reference.description is not None:
            return await self._complete_by_description(reference.description, prompt)

        return CompletionResult(
            success=False,
            message="Could not identify which task to complete. Please provide more information.",
            outcome="insufficient_info",
        )

    # name used by the HTTP layer
    process_task_completion_request = resolve_and_complete

    def _notes(self, prompt: str) -> str:
        return f'Completed via AI copilot request: "{prompt}"'

    async def _complete_by_id(self, task_id: int, prompt: str) -> CompletionResult:
        task = await self.tasks.get_by_id(task_id)
        if task is None:
            return CompletionResult(
                success=False,
                message=f"Task #{task_id} not found.",
                outcome="not_found",
            )

        already = CompletionResult(
            success=False,
            message=f"Task #{task_id} is already marked as complete.",
            outcome="already_completed",
        )
        if task.status == "completed":
            return already

        completed = await self.tasks.complete(task_id, self._notes(prompt), self.user_id)
        if completed is None:
            # lost a race with another completion of the same task
            return already

        logger.info(f"Task #{task_id} marked complete")
        return CompletionResult(
            success=True,
            message=f"Successfully marked task #{task_id} as complete.",
            outcome="completed",
            task=completed,
        )

    async def _complete_by_description(self, phrase: str, prompt: str) -> CompletionResult:
        pending = await self.tasks.get_by_status("pending")
        matches = matching_tasks(pending, phrase)

        if not matches:
            return CompletionResult(
                success=False,
                message=f'No pending tasks found matching "{phrase}".',
                outcome="no_match",
            )

        if len(matches) > 1:
            logger.info(f"{len(matches)} pending tasks match '{phrase}', asking for an id")
            return CompletionResult(
                success=False,
                message=(
                    f'Multiple tasks match "{phrase}". '
                    "Please specify which task to complete by its ID."
                ),
                outcome="ambiguous",
            )

        task = matches[0]
        completed = await self.tasks.complete(task.id, self._notes(prompt), self.user_id)
        if completed is None:
            return CompletionResult(
                success=False,
                message=f"Task #{task.id} is already marked as complete.",
                outcome="already_completed",
            )

        logger.info(f"Task #{task.id} marked complete from phrase '{phrase}'")
        return CompletionResult(
            success=True,
            message=f'Successfully marked task "{task.description}" as complete.',
            outcome="completed",
            task=completed,
        )
