import logging


logger = logging.getLogger(__name__)

# Plain substring containment on the lowercased prompt. Phrases embedded in a
# longer phrase still count.
COMPLETION_PHRASES = (
    "mark as complete",
    "mark as completed",
    "mark task as complete",
    "mark task as completed",
    "mark the task as complete",
    "mark the task as completed",
    "complete task",
    "completed task",
    "task completed",
    "task is done",
    "task is complete",
    "task is completed",
    "finished task",
    "task is finished",
    "resolved task",
    "task is resolved",
    "done with task",
    "remove task",
    "take care of",
    "taken care of",
    "addressed the issue",
    "fixed the issue",
    # "mark <something> as complete"
    "as complete",
    "as done",
    "as finished",
)


def is_completion_intent(text: str) -> bool:
    """Whether the prompt asks to mark a follow-up task as done."""
    lowered = (text or "").lower()
    matched = any(phrase in lowered for phrase in COMPLETION_PHRASES)
    logger.debug(f"Completion intent: {matched}")
    return matched
