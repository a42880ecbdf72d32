from __future__ import annotations

import logging
import re
from typing import Optional, List, Tuple, Pattern

from nurse_manager.models import TaskReference

logger = logging.getLogger(__name__)

_END = r"(?:\.|\?|$)"

# One alternation so the leftmost id reference in the text wins; the first
# group that participated holds the number. [0-9] keeps non-ASCII digits out.
TASK_ID_PATTERN: Pattern[str] = re.compile(
    r"\btask\s+#?([0-9]+)"
    r"|#([0-9]+)"
    r"|\btask\s+id\s+([0-9]+)"
    r"|\btask\s+number\s+([0-9]+)",
    re.IGNORECASE,
)

DESCRIPTION_RULES: List[Tuple[str, Pattern[str]]] = [
    (
        "mark X as complete",
        re.compile(
            r"\bmark\s+(.*?)\s+as\s+(?:complete|completed|done|finished)",
            re.IGNORECASE,
        ),
    ),
    ("completed X", re.compile(r"\bcompleted\s+(.*?)" + _END, re.IGNORECASE)),
    ("finished X", re.compile(r"\bfinished\s+(.*?)" + _END, re.IGNORECASE)),
    ("done with X", re.compile(r"\bdone\s+with\s+(.*?)" + _END, re.IGNORECASE)),
    ("resolved X", re.compile(r"\bresolved\s+(.*?)" + _END, re.IGNORECASE)),
    ("addressed X", re.compile(r"\baddressed\s+(.*?)" + _END, re.IGNORECASE)),
    ("fixed X", re.compile(r"\bfixed\s+(.*?)" + _END, re.IGNORECASE)),
    ("taken care of X", re.compile(r"\btaken\s+care\s+of\s+(.*?)" + _END, re.IGNORECASE)),
]

# A phrase that is nothing but an identifier reference whose number did not
# parse ("task #abc", "#abc", "task id xyz").
_DANGLING_ID = re.compile(
    r"^(?:task\s+(?:#|id\s+|number\s+)\S*|#\S*)$", re.IGNORECASE
)


def extract_task_id(text: str) -> Optional[int]:
    match = TASK_ID_PATTERN.search(text)
    if not match:
        return None
    digits = next(g for g in match.groups() if g is not None)
    try:
        task_id = int(digits)
    except ValueError:
        # more digits than int() will convert
        return None
    logger.debug(f"Task id {task_id} matched '{match.group(0)}'")
    return task_id


def extract_task_description(text: str) -> Optional[str]:
    for name, pattern in DESCRIPTION_RULES:
        match = pattern.search(text)
        if not match:
            continue
        candidate = (match.group(1) or "").strip()
        if not candidate or _DANGLING_ID.match(candidate):
            continue
        logger.debug(f"Task description '{candidate}' matched rule '{name}'")
        return candidate
    return None


def extract_reference(text: str) -> TaskReference:
    """
    Pull a task reference out of free text.

    A numeric id always wins over a description found in the same text.
    Nothing found yields an empty reference, never an error.
    """
    text = text or ""

    task_id = extract_task_id(text)
    if task_id is not None:
        return TaskReference(id=task_id, prompt=text)

    description = extract_task_description(text)
    if description is not None:
        return TaskReference(description=description, prompt=text)

    return TaskReference(prompt=text)
