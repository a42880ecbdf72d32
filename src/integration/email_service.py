import logging
import os
import re
from typing import Any, Dict, List, Literal, Optional, Union

import requests
from pydantic import BaseModel

logger = logging.getLogger(__name__)

SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY", "").strip()
SENDGRID_URL = os.getenv("SENDGRID_URL", "https://api.sendgrid.com/v3/mail/send")
EMAIL_FROM = os.getenv("EMAIL_FROM", "nuvanta@healthcare.org")
EMAIL_TIMEOUT_S = float(os.getenv("EMAIL_TIMEOUT_S", "10"))

DEFAULT_FOOTER = "This is an automated message from Nuvanta Nurse Manager System."

AlertType = Literal["Critical", "Important", "Informational"]

ALERT_COLORS: Dict[str, str] = {
    "Critical": "#f56565",
    "Important": "#ed8936",
    "Informational": "#4299e1",
}

Recipients = Union[str, List[str]]

_TAG = re.compile(r"<[^>]*>")

STAFF_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; }}
    .container {{ padding: 20px; border: 1px solid #e0e0e0; border-radius: 5px; }}
    .header {{ border-bottom: 2px solid #4299e1; padding-bottom: 10px; margin-bottom: 20px; }}
    .header h1 {{ color: #2b6cb0; margin: 0; font-size: 24px; }}
    .content {{ padding: 0 10px; }}
    .footer {{ margin-top: 30px; padding-top: 10px; border-top: 1px solid #e0e0e0; font-size: 12px; color: #666; }}
    .button {{ display: inline-block; background-color: #4299e1; color: white; padding: 10px 20px; text-decoration: none; border-radius: 5px; margin: 20px 0; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>Nuvanta Nurse Management</h1></div>
    <div class="content">{content}</div>
    <div class="footer">{footer}</div>
  </div>
</body>
</html>
"""


class EmailResult(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None


def _as_list(to: Recipients) -> List[str]:
    return [to] if isinstance(to, str) else list(to)


def strip_tags(html: str) -> str:
    return _TAG.sub("", html)


def alert_subject(alert_type: str, details: str) -> str:
    suffix = "..." if len(details) > 40 else ""
    return f"{alert_type} Alert: {details[:40]}{suffix}"


class EmailService:
    """Outbound staff email through the SendGrid v3 API."""

    def __init__(
        self,
        api_key: str = SENDGRID_API_KEY,
        default_from: str = EMAIL_FROM,
        url: str = SENDGRID_URL,
        timeout_s: float = EMAIL_TIMEOUT_S,
    ):
        self.api_key = api_key
        self.default_from = default_from
        self.url = url
        self.timeout_s = timeout_s
        if not api_key:
            logger.warning("SENDGRID_API_KEY is not set, emails will not be sent")

    def _payload(
        self,
        to: List[str],
        subject: str,
        text: Optional[str],
        html: Optional[str],
        from_: Optional[str],
        reply_to: Optional[str],
    ) -> Dict[str, Any]:
        content = []
        # SendGrid requires text/plain before text/html
        if text:
            content.append({"type": "text/plain", "value": text})
        if html:
            content.append({"type": "text/html", "value": html})

        payload: Dict[str, Any] = {
            "personalizations": [{"to": [{"email": addr} for addr in to]}],
            "from": {"email": from_ or self.default_from},
            "subject": subject,
            "content": content,
        }
        if reply_to:
            payload["reply_to"] = {"email": reply_to}
        return payload

    def send_email(
        self,
        to: Recipients,
        subject: str,
        text: Optional[str] = None,
        html: Optional[str] = None,
        from_: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> EmailResult:
        recipients = _as_list(to)
        try:
            if not self.api_key:
                raise RuntimeError("SENDGRID_API_KEY environment variable is not set")

            resp = requests.post(
                self.url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=self._payload(recipients, subject, text, html, from_, reply_to),
                timeout=self.timeout_s,
            )
            resp.raise_for_status()
        except Exception as e:
            logger.error(f"Error sending email: {e}")
            return EmailResult(success=False, message="Failed to send email", error=str(e))

        logger.info(f"Email sent to {', '.join(recipients)}")
        return EmailResult(success=True, message="Email sent successfully")

    def send_staff_notification(
        self,
        to: Recipients,
        subject: str,
        message_content: str,
        footer_text: str = DEFAULT_FOOTER,
    ) -> EmailResult:
        html = STAFF_TEMPLATE.format(content=message_content, footer=footer_text)
        text = strip_tags(message_content) + "\n\n" + footer_text
        return self.send_email(to, subject, text=text, html=html)

    def send_schedule_notification(
        self,
        to: Recipients,
        nurse_name: str,
        schedule_details: str,
        start_date: str,
        end_date: str,
        additional_message: str = "",
    ) -> EmailResult:
        subject = f"Schedule Update: {start_date} - {end_date}"
        extra = f"<p>{additional_message}</p>" if additional_message else ""
        content = f"""
<p>Hello {nurse_name},</p>
<p>Your schedule for the period <strong>{start_date}</strong> to <strong>{end_date}</strong> has been updated.</p>
<h3>Your Schedule:</h3>
<div style="background-color: #f8f9fa; padding: 15px; border-radius: 5px;">{schedule_details}</div>
{extra}
<p>Please log in to the Nuvanta system to view your complete schedule.</p>
<a href="#" class="button">View Full Schedule</a>
<p>If you have any questions or concerns about your schedule, please contact your nurse manager.</p>
<p>Thank you,<br>Nuvanta Management Team</p>
"""
        return self.send_staff_notification(to, subject, content)

    def send_alert_notification(
        self,
        to: Recipients,
        alert_type: AlertType,
        alert_details: str,
        action_required: bool = False,
        action_text: str = "",
        due_date: str = "",
    ) -> EmailResult:
        color = ALERT_COLORS.get(alert_type, ALERT_COLORS["Informational"])
        action = ""
        if action_required:
            action = f"<p><strong>Action Required:</strong> {action_text}</p>"
            if due_date:
                action += f"<p><strong>Due Date:</strong> {due_date}</p>"

        content = f"""
<div style="border-left: 4px solid {color}; padding-left: 15px; margin: 15px 0;">
  <h3 style="color: {color};">{alert_type} Alert</h3>
  <p>{alert_details}</p>
  {action}
</div>
<p>Please log in to the Nuvanta system for more details.</p>
<a href="#" class="button">View Details</a>
"""
        return self.send_staff_notification(to, alert_subject(alert_type, alert_details), content)
