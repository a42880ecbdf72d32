from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from nurse_manager.models import ComplianceReport, Nurse, ShiftAssignment, ShiftType, Unit
from staffing import mock_data
from staffing.roster import dates_in_month, generate_monthly_schedule

REFERENCE_DATE = os.getenv("REFERENCE_DATE", "2025-05-17")

DAY_SHIFT_REQUIRED = 14
NIGHT_SHIFT_REQUIRED = 12


@dataclass(frozen=True)
class StaffingDataProvider:
    """
    Read-only view over roster, unit and compliance data.

    Injected wherever staffing figures are needed instead of importing the
    mock lists directly.
    """

    nurses: List[Nurse]
    units: List[Unit]
    compliance_reports: List[ComplianceReport]
    reference_date: date
    schedule: List[ShiftAssignment] = field(default_factory=list)

    @classmethod
    def from_mock_data(cls, reference_date: Optional[str] = None) -> "StaffingDataProvider":
        ref = datetime.strptime(reference_date or REFERENCE_DATE, "%Y-%m-%d").date()
        return cls(
            nurses=list(mock_data.NURSES),
            units=list(mock_data.UNITS),
            compliance_reports=list(mock_data.COMPLIANCE_REPORTS),
            reference_date=ref,
            schedule=generate_monthly_schedule(mock_data.NURSES, ref.year, ref.month),
        )

    def nurses_for_day(self, day: str, shift: ShiftType) -> List[int]:
        return [a.nurse_id for a in self.schedule if a.date == day and a.shift == shift]

    def staffing_for_day(self, day: str) -> dict:
        day_staff = len(self.nurses_for_day(day, "day"))
        night_staff = len(self.nurses_for_day(day, "night"))
        return {
            "day": day_staff,
            "night": night_staff,
            "dayRequired": DAY_SHIFT_REQUIRED,
            "nightRequired": NIGHT_SHIFT_REQUIRED,
            "dayShortage": max(0, DAY_SHIFT_REQUIRED - day_staff),
            "nightShortage": max(0, NIGHT_SHIFT_REQUIRED - night_staff),
        }

    def staffing_by_unit(self, day: str) -> Dict[str, dict]:
        by_id = {n.id: n for n in self.nurses}
        result: Dict[str, dict] = {}
        for unit in self.units:
            result[unit.name] = {
                "name": unit.name,
                "dayStaff": 0,
                "nightStaff": 0,
                "requiredDay": unit.required_nurses_day,
                "requiredNight": unit.required_nurses_night,
            }

        for shift, key in (("day", "dayStaff"), ("night", "nightStaff")):
            for nurse_id in self.nurses_for_day(day, shift):
                nurse = by_id.get(nurse_id)
                if nurse is not None and nurse.unit in result:
                    result[nurse.unit][key] += 1

        for data in result.values():
            data["dayShortage"] = max(0, data["requiredDay"] - data["dayStaff"])
            data["nightShortage"] = max(0, data["requiredNight"] - data["nightStaff"])
        return result

    def upcoming_staffing(self, from_date: Optional[str] = None, days: int = 5) -> List[dict]:
        start = (
            datetime.strptime(from_date, "%Y-%m-%d").date() if from_date else self.reference_date
        )
        out = []
        for i in range(days):
            d = start + timedelta(days=i)
            staffing = self.staffing_for_day(d.isoformat())
            out.append(
                {
                    "date": d.isoformat(),
                    "dayOfWeek": d.strftime("%A"),
                    "fullDate": f"{d.strftime('%B')} {d.day}, {d.year}",
                    "dayStaffing": {
                        "scheduled": staffing["day"],
                        "required": staffing["dayRequired"],
                        "status": "understaffed" if staffing["dayShortage"] > 0 else "full",
                    },
                    "nightStaffing": {
                        "scheduled": staffing["night"],
                        "required": staffing["nightRequired"],
                        "status": "understaffed" if staffing["nightShortage"] > 0 else "full",
                    },
                }
            )
        return out

    def understaffed_days(self) -> List[dict]:
        out = []
        for d in dates_in_month(self.reference_date.year, self.reference_date.month):
            staffing = self.staffing_for_day(d.isoformat())
            if staffing["dayShortage"] > 0:
                out.append({"date": d.isoformat(), "shift": "day", "shortage": staffing["dayShortage"]})
            if staffing["nightShortage"] > 0:
                out.append({"date": d.isoformat(), "shift": "night", "shortage": staffing["nightShortage"]})
        return out

    def snapshot(self) -> dict:
        today = self.staffing_for_day(self.reference_date.isoformat())
        shortage = today["dayShortage"] + today["nightShortage"]
        return {
            "status": "Fully staffed today" if shortage == 0 else f"Short {shortage} RNs today",
            "onDuty": today["day"] + today["night"],
            "total": len(self.nurses),
            "dayShift": sum(1 for n in self.nurses if n.shift == "day"),
            "nightShift": sum(1 for n in self.nurses if n.shift == "night"),
        }

    def burnout_risk(self) -> dict:
        at_risk = [n for n in self.nurses if n.burnout_risk == "high"]
        return {
            "count": len(at_risk),
            "staff": [{"name": n.name} for n in at_risk],
            "lastUpdated": self.reference_date.isoformat(),
        }

    def compliance_summary(self) -> dict:
        reports = sorted(self.compliance_reports, key=lambda r: r.due_date)
        quarterly = next(
            (r for r in reports if r.name == "Quarterly staff performance report"),
            reports[0] if reports else None,
        )
        return {
            "description": f"{quarterly.name} due {quarterly.due_date}" if quarterly else "",
            "percentComplete": quarterly.percent_complete if quarterly else 0,
            "lastEdited": quarterly.last_edited if quarterly else "",
            "reports": [r.model_dump() for r in reports],
        }

    def context_summary(self, open_tasks: int, overdue_tasks: int) -> str:
        """Plain-text figures handed to the LLM as background."""
        today = self.staffing_for_day(self.reference_date.isoformat())
        snap = self.snapshot()
        burnout = self.burnout_risk()
        next_report = min(self.compliance_reports, key=lambda r: r.due_date, default=None)
        lines = [
            f"Date: {self.reference_date.isoformat()}",
            f"Total nurses: {snap['total']} ({snap['dayShift']} day shift, {snap['nightShift']} night shift)",
            f"Day staffing today: {today['day']}/{today['dayRequired']}",
            f"Night staffing today: {today['night']}/{today['nightRequired']}",
            f"Nurses at high burnout risk: {burnout['count']} "
            f"({', '.join(s['name'] for s in burnout['staff'])})",
            f"Open follow-up tasks: {open_tasks} ({overdue_tasks} overdue)",
        ]
        if next_report is not None:
            lines.append(
                f"Next compliance report: {next_report.name}, due {next_report.due_date}, "
                f"{next_report.percent_complete}% complete"
            )
        return "\n".join(lines)
