import asyncio
import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from api.dependencies import get_email_service
from api.metrics import EMAILS_SENT_TOTAL
from integration.email_service import ALERT_COLORS, EmailResult, EmailService

router = APIRouter()
logger = logging.getLogger(__name__)

Recipients = Union[str, List[str]]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SendEmailIn(_CamelModel):
    to: Recipients
    subject: str
    text: Optional[str] = None
    html: Optional[str] = None


class ScheduleNotificationIn(_CamelModel):
    to: Recipients
    nurse_name: str = Field(..., alias="nurseName")
    schedule_details: str = Field(..., alias="scheduleDetails")
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")
    additional_message: str = Field("", alias="additionalMessage")


class AlertNotificationIn(_CamelModel):
    to: Recipients
    alert_type: str = Field(..., alias="alertType")
    alert_details: str = Field(..., alias="alertDetails")
    action_required: bool = Field(False, alias="actionRequired")
    action_text: str = Field("", alias="actionText")
    due_date: str = Field("", alias="dueDate")


class Recipient(BaseModel):
    email: str
    name: Optional[str] = None


class BatchEmailIn(_CamelModel):
    recipients: List[Recipient] = Field(..., min_length=1)
    subject: str
    message_content: str = Field(..., alias="messageContent")


def _record(result: EmailResult) -> dict:
    EMAILS_SENT_TOTAL.labels(status="sent" if result.success else "failed").inc()
    return result.model_dump(exclude_none=True)


@router.post("/send")
async def send_email(
    payload: SendEmailIn,
    emails: EmailService = Depends(get_email_service),
) -> dict:
    if not payload.to or not payload.subject or not (payload.text or payload.html):
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: to, subject, and either text or html",
        )
    result = await asyncio.to_thread(
        emails.send_email, payload.to, payload.subject, text=payload.text, html=payload.html
    )
    return _record(result)


@router.post("/schedule-notification")
async def send_schedule_notification(
    payload: ScheduleNotificationIn,
    emails: EmailService = Depends(get_email_service),
) -> dict:
    result = await asyncio.to_thread(
        emails.send_schedule_notification,
        payload.to,
        payload.nurse_name,
        payload.schedule_details,
        payload.start_date,
        payload.end_date,
        payload.additional_message,
    )
    return _record(result)


@router.post("/alert-notification")
async def send_alert_notification(
    payload: AlertNotificationIn,
    emails: EmailService = Depends(get_email_service),
) -> dict:
    if payload.alert_type not in ALERT_COLORS:
        raise HTTPException(
            status_code=400,
            detail="alertType must be one of: Critical, Important, Informational",
        )
    result = await asyncio.to_thread(
        emails.send_alert_notification,
        payload.to,
        payload.alert_type,
        payload.alert_details,
        payload.action_required,
        payload.action_text,
        payload.due_date,
    )
    return _record(result)


@router.post("/batch")
async def send_batch(
    payload: BatchEmailIn,
    emails: EmailService = Depends(get_email_service),
) -> dict:
    """One message to many staff members."""
    addresses = [r.email for r in payload.recipients]
    logger.info(f"Sending batch email to {len(addresses)} recipients")
    result = await asyncio.to_thread(
        emails.send_email, addresses, payload.subject, html=payload.message_content
    )
    return _record(result)
