from __future__ import annotations

import logging
from typing import Tuple

logger = logging.getLogger(__name__)

REQUEST_KEYWORDS = (
    "remind me",
    "schedule",
    "put in",
    "add to calendar",
    "add to my calendar",
    "create a reminder",
    "set a reminder",
    "calendar",
    "check in with",
    "follow up with",
    "check back",
    "remember to",
)

CONFIRMATION_PHRASES = (
    "I've added this to your calendar",
    "I've scheduled this for you",
    "I've scheduled this reminder for you",
    "added to your calendar",
    "added this reminder",
    "created a calendar event",
    "scheduled a reminder",
    "put this on your calendar",
    "added to the calendar",
    "I'll remind you",
    "reminder has been set",
    "reminder is set",
)


def _contains_any(text: str, phrases) -> bool:
    lowered = (text or "").lower()
    return any(p.lower() in lowered for p in phrases)


def calendar_signals(prompt: str, response_text: str) -> Tuple[bool, bool]:
    """
    Returns (prompt_has_request, response_has_confirmation).
    The two signals are computed independently of each other.
    """
    return (
        _contains_any(prompt, REQUEST_KEYWORDS),
        _contains_any(response_text, CONFIRMATION_PHRASES),
    )


def is_calendar_intent(prompt: str, response_text: str) -> bool:
    """Either signal alone is enough to create a reminder."""
    requested, confirmed = calendar_signals(prompt, response_text)
    logger.info(
        f"Calendar intent - prompt request: {requested}, response confirmation: {confirmed}"
    )
    return requested or confirmed
