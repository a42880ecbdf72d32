from __future__ import annotations

import calendar
from datetime import date
from typing import List

from nurse_manager.models import Nurse, ShiftAssignment


def dates_in_month(year: int, month: int) -> List[date]:
    days = calendar.monthrange(year, month)[1]
    return [date(year, month, d) for d in range(1, days + 1)]


def _weekday_sunday_first(d: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (d.weekday() + 1) % 7


def generate_monthly_schedule(
    nurses: List[Nurse], year: int = 2025, month: int = 5
) -> List[ShiftAssignment]:
    """
    Fixed rotation, not an optimizer.

    A nurse works on their home weekday (id % 7) and additionally on days
    where their rotation group (id % 2) matches the day's group and the
    day index lines up with the id (mod 3 for day shift, mod 4 for nights).
    """
    schedule: List[ShiftAssignment] = []

    for index, d in enumerate(dates_in_month(year, month)):
        weekday = _weekday_sunday_first(d)
        group = index % 2
        iso = d.isoformat()

        for nurse in nurses:
            modulus = 3 if nurse.shift == "day" else 4
            home_day = nurse.id % 7 == weekday
            rotation = nurse.id % 2 == group and index % modulus == nurse.id % modulus
            if home_day or rotation:
                schedule.append(ShiftAssignment(nurse_id=nurse.id, date=iso, shift=nurse.shift))

    return schedule
