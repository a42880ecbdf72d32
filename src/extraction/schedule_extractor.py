from __future__ import annotations

import calendar
import logging
import re
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple, Pattern

from nurse_manager.models import ExtractedSchedule

logger = logging.getLogger(__name__)


def add_months(base: datetime, months: int) -> datetime:
    """Advance by calendar months, clamping the day to the target month's length."""
    month_index = base.month - 1 + months
    year = base.year + month_index // 12
    month = month_index % 12 + 1
    day = min(base.day, calendar.monthrange(year, month)[1])
    return base.replace(year=year, month=month, day=day)


_CONNECTIVE = r"\b(?:in|after|next|following)\s+([0-9]+)\s+"

# Checked in this order; once one rule matches the rest are skipped.
DATE_RULES: List[Tuple[str, Pattern[str], Callable[[datetime, int], datetime]]] = [
    ("months", re.compile(_CONNECTIVE + r"months?\b", re.IGNORECASE), add_months),
    ("weeks", re.compile(_CONNECTIVE + r"weeks?\b", re.IGNORECASE),
     lambda base, n: base + timedelta(days=7 * n)),
    ("days", re.compile(_CONNECTIVE + r"days?\b", re.IGNORECASE),
     lambda base, n: base + timedelta(days=n)),
]

NAME_PATTERN = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)\b")

NAME_STOP_WORDS = frozenset(
    {"I", "You", "The", "A", "An", "In", "On", "At", "For", "With", "And", "Or", "But"}
)


def resolve_date(
    prompt: str, response_text: str, now: Optional[datetime] = None
) -> Tuple[datetime, bool]:
    """
    Returns (date, inferred). inferred is True when nothing matched and
    the date fell back to `now`.
    """
    base = now or datetime.now()
    for name, pattern, advance in DATE_RULES:
        match = pattern.search(prompt or "") or pattern.search(response_text or "")
        if not match:
            continue
        try:
            amount = int(match.group(1))
            logger.debug(f"Date rule '{name}' matched: +{amount}")
            return advance(base, amount), False
        except (OverflowError, ValueError):
            # past year 9999; the latest representable datetime stands in
            logger.warning(f"Date rule '{name}' out of range for '{match.group(0)}'")
            return datetime.max, False
    return base, True


def extract_names(*texts: str) -> List[str]:
    """Capitalised one- or two-word tokens, deduplicated in order of appearance."""
    names: List[str] = []
    for text in texts:
        for match in NAME_PATTERN.finditer(text or ""):
            name = match.group(1)
            if name in NAME_STOP_WORDS or name in names:
                continue
            names.append(name)
    return names


def extract_schedule(
    prompt: str, response_text: str, now: Optional[datetime] = None
) -> ExtractedSchedule:
    event_date, inferred = resolve_date(prompt, response_text, now=now)
    if inferred:
        logger.info("No date expression found, defaulting event date to now")
    return ExtractedSchedule(
        date=event_date,
        names=extract_names(prompt, response_text),
        date_inferred=inferred,
    )
