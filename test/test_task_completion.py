import asyncio

from completion.task_completion import TaskCompletionOrchestrator, matching_tasks
from conftest import make_task
from storage.task_repository import InMemoryTaskRepository


def _run(orchestrator, prompt):
    return asyncio.run(orchestrator.resolve_and_complete(prompt))


def test_not_a_request_touches_nothing(task_repo):
    result = _run(TaskCompletionOrchestrator(task_repo), "who is on shift tonight?")
    assert result.success is False
    assert result.outcome == "not_a_request"
    assert result.message == "Not a task completion request"


def test_complete_by_id(task_repo):
    result = _run(TaskCompletionOrchestrator(task_repo, user_id=7), "Mark task #2 as complete")

    assert result.success is True
    assert result.message == "Successfully marked task #2 as complete."
    assert result.task.status == "completed"
    assert result.task.completed_by == 7
    assert result.task.completed_at is not None
    assert result.task.completion_notes == 'Completed via AI copilot request: "Mark task #2 as complete"'

    stored = asyncio.run(task_repo.get_by_id(2))
    assert stored.status == "completed"


def test_overdue_task_can_be_completed_by_id(task_repo):
    result = _run(TaskCompletionOrchestrator(task_repo), "task #4 is done")
    assert result.success is True
    assert result.task.status == "completed"


def test_unknown_id(task_repo):
    result = _run(TaskCompletionOrchestrator(task_repo), "mark task #99 as complete")
    assert result.success is False
    assert result.outcome == "not_found"
    assert result.message == "Task #99 not found."


def test_id_zero_is_looked_up(task_repo):
    result = _run(TaskCompletionOrchestrator(task_repo), "task #0 is done")
    assert result.outcome == "not_found"
    assert result.message == "Task #0 not found."


def test_already_completed(task_repo):
    before = asyncio.run(task_repo.get_by_id(3))
    result = _run(TaskCompletionOrchestrator(task_repo), "task #3 is complete")

    assert result.success is False
    assert result.outcome == "already_completed"
    assert result.message == "Task #3 is already marked as complete."
    assert asyncio.run(task_repo.get_by_id(3)) == before


def test_second_completion_is_rejected(task_repo):
    orchestrator = TaskCompletionOrchestrator(task_repo)
    first = _run(orchestrator, "mark task #1 as done")
    second = _run(orchestrator, "mark task #1 as done")
    assert first.success is True
    assert second.outcome == "already_completed"


def test_complete_by_description(task_repo):
    result = _run(TaskCompletionOrchestrator(task_repo), "mark equipment request as complete")

    assert result.success is True
    assert result.message == 'Successfully marked task "Equipment request for Room 202" as complete.'
    assert asyncio.run(task_repo.get_by_id(1)).status == "completed"
    assert asyncio.run(task_repo.get_by_id(2)).status == "pending"


def test_description_only_considers_pending_tasks(task_repo):
    # task 4 is overdue, not pending
    result = _run(TaskCompletionOrchestrator(task_repo), "mark inventory check as done")
    assert result.success is False
    assert result.outcome == "no_match"
    assert result.message == 'No pending tasks found matching "inventory check".'


def test_ambiguous_description_changes_nothing():
    repo = InMemoryTaskRepository(
        [
            make_task(1, "Equipment request for Room 202"),
            make_task(2, "Schedule adjustment request"),
        ]
    )
    result = _run(TaskCompletionOrchestrator(repo), "mark request as complete")

    assert result.success is False
    assert result.outcome == "ambiguous"
    assert result.message == (
        'Multiple tasks match "request". Please specify which task to complete by its ID.'
    )
    statuses = [t.status for t in asyncio.run(repo.list_all())]
    assert statuses == ["pending", "pending"]


def test_malformed_id_is_insufficient_info(task_repo):
    result = _run(TaskCompletionOrchestrator(task_repo), "mark task #abc as complete")
    assert result.outcome == "insufficient_info"
    assert result.message == (
        "Could not identify which task to complete. Please provide more information."
    )


def test_http_alias():
    assert (
        TaskCompletionOrchestrator.process_task_completion_request
        is TaskCompletionOrchestrator.resolve_and_complete
    )


def test_matching_is_bidirectional():
    tasks = [make_task(1, "Staff training registration"), make_task(2, "Budget review")]
    assert [t.id for t in matching_tasks(tasks, "TRAINING")] == [1]
    # description contained in a longer phrase
    assert [t.id for t in matching_tasks(tasks, "the budget review for june")] == [2]


def test_completes_the_task_named_first(task_repo):
    result = _run(TaskCompletionOrchestrator(task_repo), "mark task 2 as complete, it replaced #1")

    assert result.success is True
    assert result.message == "Successfully marked task #2 as complete."
    assert asyncio.run(task_repo.get_by_id(2)).status == "completed"
    assert asyncio.run(task_repo.get_by_id(1)).status == "pending"
