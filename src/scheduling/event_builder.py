from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from extraction.schedule_extractor import extract_schedule
from nurse_manager.models import CalendarEventCreate, Priority

logger = logging.getLogger(__name__)

ASSISTANT_NAME = os.getenv("ASSISTANT_NAME", "Nuvanta").strip() or "Nuvanta"
DEFAULT_TITLE = "AI-created reminder"
DEFAULT_USER_ID = int(os.getenv("DEFAULT_USER_ID", "1"))

CHECK_IN = re.compile(r"\bcheck(\s+in)?\s+with\b", re.IGNORECASE)
FOLLOW_UP = re.compile(r"\bfollow(\s*|-*)up\b", re.IGNORECASE)
REMIND = re.compile(r"\bremind(\s+me)?\b", re.IGNORECASE)
REMIND_ME_OBJECT = re.compile(
    r"\bremind\s+me\s+(?:about|to|of)\s+(.+?)(?:\.|\?|$)", re.IGNORECASE
)
REMIND_YOU_OBJECT = re.compile(
    r"\bremind\s+you\s+(?:about|to|of)\s+(.+?)(?:\.|\?|$)", re.IGNORECASE
)

# Unbracketed: only the outer terms are word-anchored, "urgently" counts.
HIGH_PRIORITY = re.compile(r"\bimportant|urgent|critical|high\s+priority\b", re.IGNORECASE)
LOW_PRIORITY = re.compile(r"\blow\s+priority|whenever|not\s+urgent\b", re.IGNORECASE)


def _either(pattern: re.Pattern, prompt: str, response_text: str) -> bool:
    return bool(pattern.search(prompt) or pattern.search(response_text))


def _reminder_title(prompt: str, response_text: str, names: List[str]) -> str:
    match = REMIND_ME_OBJECT.search(prompt) or REMIND_YOU_OBJECT.search(response_text)
    if match and match.group(1).strip():
        return f"Reminder: {match.group(1).strip()}"
    return f"Reminder from {ASSISTANT_NAME}"


# (predicate, title) rules; the first predicate that holds picks the title.
TITLE_RULES: List[
    Tuple[Callable[[str, str, List[str]], bool], Callable[[str, str, List[str]], str]]
] = [
    (
        lambda p, r, names: bool(names) and _either(CHECK_IN, p, r),
        lambda p, r, names: f"Check in with {', '.join(names)}",
    ),
    (
        lambda p, r, names: bool(names) and _either(FOLLOW_UP, p, r),
        lambda p, r, names: f"Follow up with {', '.join(names)}",
    ),
    (
        lambda p, r, names: _either(REMIND, p, r),
        _reminder_title,
    ),
]


def derive_title(prompt: str, response_text: str, names: List[str]) -> str:
    for predicate, title in TITLE_RULES:
        if predicate(prompt, response_text, names):
            return title(prompt, response_text, names)
    return DEFAULT_TITLE


def derive_priority(prompt: str, response_text: str) -> Priority:
    """High-urgency words are checked first, so they win over low-urgency ones."""
    if _either(HIGH_PRIORITY, prompt, response_text):
        return "high"
    if _either(LOW_PRIORITY, prompt, response_text):
        return "low"
    return "medium"


def build_event(
    prompt: str, response_text: str, now: Optional[datetime] = None
) -> CalendarEventCreate:
    """Synthesize a calendar reminder from a prompt/response exchange."""
    prompt = prompt or ""
    response_text = response_text or ""

    schedule = extract_schedule(prompt, response_text, now=now)
    title = derive_title(prompt, response_text, schedule.names)

    event = CalendarEventCreate(
        user_id=DEFAULT_USER_ID,
        title=title,
        description=prompt,
        event_date=schedule.date,
        reminder=True,
        priority=derive_priority(prompt, response_text),
        related_to=", ".join(schedule.names),
    )
    logger.info(f"Built calendar event '{event.title}' for {event.event_date.isoformat()}")
    return event
