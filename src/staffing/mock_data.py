"""
Static hospital data used when no real roster is wired in.

Everything here is treated as a read-only snapshot: callers get it through
StaffingDataProvider and never mutate these lists.
"""
from datetime import datetime
from typing import Dict, List

from nurse_manager.models import ComplianceReport, Nurse, Task, Unit


def _nurse(id, name, unit, shift, risk, consecutive, last_break) -> Nurse:
    return Nurse(
        id=id,
        name=name,
        unit=unit,
        shift=shift,
        burnout_risk=risk,
        consecutive_shifts=consecutive,
        last_break=last_break,
    )


NURSES: List[Nurse] = [
    # day shift (14)
    _nurse(1, "Sarah Chen", "Medical-Surgical", "day", "high", 6, "2023-06-01"),
    _nurse(2, "James Wilson", "Medical-Surgical", "day", "low", 2, "2023-06-10"),
    _nurse(3, "Emily Johnson", "Medical-Surgical", "day", "low", 1, "2023-06-11"),
    _nurse(4, "David Lee", "Medical-Surgical", "day", "low", 3, "2023-06-09"),
    _nurse(5, "Lisa Patel", "Medical-Surgical", "day", "low", 2, "2023-06-10"),
    _nurse(6, "Robert Kim", "Intensive Care", "day", "low", 1, "2023-06-11"),
    _nurse(7, "Jennifer Lopez", "Intensive Care", "day", "low", 2, "2023-06-10"),
    _nurse(8, "Michael Johnson", "Intensive Care", "day", "high", 4, "2023-06-08"),
    _nurse(9, "Nancy Garcia", "Emergency", "day", "low", 1, "2023-06-11"),
    _nurse(10, "Thomas Brown", "Emergency", "day", "low", 2, "2023-06-10"),
    _nurse(11, "Sandra Martinez", "Emergency", "day", "medium", 3, "2023-06-09"),
    _nurse(12, "Kevin Smith", "Emergency", "day", "low", 1, "2023-06-11"),
    _nurse(13, "Maria Gonzalez", "Maternity", "day", "low", 2, "2023-06-10"),
    _nurse(14, "William Davis", "Maternity", "day", "low", 1, "2023-06-11"),
    # night shift (12)
    _nurse(15, "Patricia White", "Medical-Surgical", "night", "low", 1, "2023-06-11"),
    _nurse(16, "Richard Taylor", "Medical-Surgical", "night", "low", 2, "2023-06-10"),
    _nurse(17, "Elizabeth Thomas", "Medical-Surgical", "night", "medium", 3, "2023-06-09"),
    _nurse(18, "Joseph Harris", "Intensive Care", "night", "low", 1, "2023-06-11"),
    _nurse(19, "Susan Jackson", "Intensive Care", "night", "low", 2, "2023-06-10"),
    _nurse(20, "Daniel Moore", "Intensive Care", "night", "low", 1, "2023-06-11"),
    _nurse(21, "Carol Martin", "Emergency", "night", "low", 1, "2023-06-11"),
    _nurse(22, "Mark Thompson", "Emergency", "night", "low", 2, "2023-06-10"),
    _nurse(23, "Michelle Walker", "Emergency", "night", "low", 1, "2023-06-11"),
    _nurse(24, "George Young", "Maternity", "night", "low", 1, "2023-06-11"),
    _nurse(25, "Karen Allen", "Maternity", "night", "low", 2, "2023-06-10"),
    _nurse(26, "Edward King", "Maternity", "night", "low", 1, "2023-06-11"),
]

UNITS: List[Unit] = [
    Unit(id=1, name="Medical-Surgical", beds=12, required_nurses_day=6, required_nurses_night=4),
    Unit(id=2, name="Intensive Care", beds=8, required_nurses_day=3, required_nurses_night=3),
    Unit(id=3, name="Emergency", beds=10, required_nurses_day=4, required_nurses_night=3),
    Unit(id=4, name="Maternity", beds=10, required_nurses_day=2, required_nurses_night=3),
]

FOLLOW_UP_TASKS: List[Task] = [
    Task(id=1, description="Equipment request for Room 202",
         date_created=datetime(2023, 6, 10), status="overdue", priority="high"),
    Task(id=2, description="Patient complaint follow-up",
         date_created=datetime(2023, 6, 10), status="overdue", priority="medium"),
    Task(id=3, description="Schedule adjustment request",
         date_created=datetime(2023, 6, 10), status="overdue", priority="medium"),
    Task(id=4, description="Staff training registration",
         date_created=datetime(2023, 6, 12), status="pending", priority="low"),
    Task(id=5, description="Inventory check for supplies",
         date_created=datetime(2023, 6, 12), status="pending", priority="medium"),
]

COMPLIANCE_REPORTS: List[ComplianceReport] = [
    ComplianceReport(id=1, name="Quarterly staff performance report",
                     due_date="2023-06-16", percent_complete=65, last_edited="2023-06-12"),
    ComplianceReport(id=2, name="Monthly patient satisfaction survey",
                     due_date="2023-06-30", percent_complete=20, last_edited="2023-06-05"),
    ComplianceReport(id=3, name="Annual safety compliance audit",
                     due_date="2023-07-15", percent_complete=10, last_edited="2023-06-01"),
    ComplianceReport(id=4, name="Weekly medication error report",
                     due_date="2023-06-14", percent_complete=90, last_edited="2023-06-12"),
]

# Canned copilot answers, keyed by the question they answer.
COPILOT_RESPONSES: Dict[str, str] = {
    "what should i follow up on today": """
<p class="mb-2">Based on your current tasks, I recommend you follow up on:</p>
<ol class="list-decimal pl-5 mb-3 space-y-1">
  <li>Equipment request for Room 202 (overdue by 3 days)</li>
  <li>Patient complaint follow-up from Mr. Johnson in Room 215</li>
  <li>Schedule adjustment request from Sarah Chen</li>
</ol>
<p>Would you like me to prioritize these tasks or help you create a follow-up plan?</p>
""",
    "who is at risk of burnout": """
<p class="mb-2">I've identified 2 staff members showing burnout risk indicators:</p>
<ul class="list-disc pl-5 mb-3 space-y-1">
  <li><strong>Sarah Chen</strong> - Has worked 6 consecutive shifts, including 2 double shifts this week.</li>
  <li><strong>Michael Johnson</strong> - Recently experienced two code events and has requested schedule changes 3 times this month.</li>
</ul>
<p>Consider checking in with them individually. Would you like suggestions for supporting these team members?</p>
""",
    "what are my top 3 priorities": """
<p class="mb-2">Based on urgency and importance, your top 3 priorities today should be:</p>
<ol class="list-decimal pl-5 mb-3 space-y-1">
  <li><strong>Staff burnout follow-up</strong> - Schedule brief check-ins with Sarah and Michael.</li>
  <li><strong>Complete overdue follow-up tasks</strong> - Especially the equipment request which impacts patient care.</li>
  <li><strong>Quarterly report progress</strong> - You need to complete at least 15% more by end of day to stay on track for Friday's deadline.</li>
</ol>
<p>Would you like help developing an action plan for any of these priorities?</p>
""",
    "default": """
<p>I'm your nurse manager copilot. How can I assist you today? I can help with staffing analysis, burnout risk assessment, task prioritization, or compliance reporting.</p>
""",
}
