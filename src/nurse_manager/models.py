from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, List

from pydantic import BaseModel, Field, field_validator


TaskStatus = Literal["pending", "completed", "overdue"]
Priority = Literal["low", "medium", "high"]
ShiftType = Literal["day", "night"]
BurnoutRisk = Literal["low", "medium", "high"]
MessageRole = Literal["user", "assistant"]


class Task(BaseModel):
    """A follow-up task as stored in the task repository."""

    id: int = Field(..., gt=0)
    description: str = Field(..., min_length=1)
    date_created: datetime = Field(default_factory=datetime.now)
    status: TaskStatus = "pending"
    priority: Priority = "medium"

    assigned_to: Optional[int] = None
    completed_at: Optional[datetime] = None
    completed_by: Optional[int] = None
    completion_notes: Optional[str] = None


class TaskCreate(BaseModel):
    description: str = Field(..., min_length=1)
    status: TaskStatus = "pending"
    priority: Priority = "medium"
    assigned_to: Optional[int] = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("description must not be blank")
        return v2


class TaskReference(BaseModel):
    """
    Which task a prompt points at. Only one of id/description is set;
    an empty reference means nothing usable was found.
    """
    id: Optional[int] = None
    description: Optional[str] = None
    prompt: str = ""

    @property
    def is_empty(self) -> bool:
        return self.id is None and self.description is None


CompletionOutcome = Literal[
    "completed",
    "not_a_request",
    "not_found",
    "already_completed",
    "no_match",
    "ambiguous",
    "insufficient_info",
]


class CompletionResult(BaseModel):
    success: bool
    message: str
    outcome: CompletionOutcome
    task: Optional[Task] = None


class CalendarEventCreate(BaseModel):
    user_id: int = 1
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    event_date: datetime
    reminder: bool = True
    priority: Priority = "medium"
    related_to: Optional[str] = None

    @field_validator("event_date")
    @classmethod
    def naive_local_time(cls, v: datetime) -> datetime:
        # stored in a TIMESTAMP column and compared against datetime.now()
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v


class CalendarEvent(CalendarEventCreate):
    id: int
    reminder_sent: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class ExtractedSchedule(BaseModel):
    date: datetime
    # insertion order preserved, duplicates dropped by the extractor
    names: List[str] = Field(default_factory=list)
    # True when no date expression matched and "now" was used
    date_inferred: bool = False


class Nurse(BaseModel):
    id: int
    name: str
    unit: str
    shift: ShiftType
    burnout_risk: BurnoutRisk = "low"
    consecutive_shifts: int = 0
    last_break: str = ""


class Unit(BaseModel):
    id: int
    name: str
    beds: int
    required_nurses_day: int
    required_nurses_night: int


class ComplianceReport(BaseModel):
    id: int
    name: str
    due_date: str
    percent_complete: int = Field(0, ge=0, le=100)
    last_edited: str = ""


class ShiftAssignment(BaseModel):
    nurse_id: int
    date: str  # YYYY-MM-DD
    shift: ShiftType


class Conversation(BaseModel):
    id: int
    user_id: int = 1
    title: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class ConversationMessage(BaseModel):
    id: int
    conversation_id: int
    role: MessageRole
    content: str
    created_at: datetime = Field(default_factory=datetime.now)
