import requests

from integration import email_service
from integration.email_service import DEFAULT_FOOTER, EmailService, alert_subject, strip_tags


class FakeResponse:
    def __init__(self, status_code: int = 202):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


def _capture(monkeypatch, status_code: int = 202):
    sent = []

    def fake_post(url, headers=None, json=None, timeout=None):
        sent.append({"url": url, "headers": headers, "json": json})
        return FakeResponse(status_code)

    monkeypatch.setattr(email_service.requests, "post", fake_post)
    return sent


def test_send_email_builds_sendgrid_payload(monkeypatch):
    sent = _capture(monkeypatch)
    service = EmailService(api_key="SG.test")

    result = service.send_email(
        ["a@example.org", "b@example.org"], "Hello", text="hi", html="<p>hi</p>", reply_to="m@example.org"
    )

    assert result.success is True
    assert result.message == "Email sent successfully"
    payload = sent[0]["json"]
    assert sent[0]["headers"]["Authorization"] == "Bearer SG.test"
    assert payload["personalizations"][0]["to"] == [
        {"email": "a@example.org"},
        {"email": "b@example.org"},
    ]
    assert payload["from"] == {"email": "nuvanta@healthcare.org"}
    assert [c["type"] for c in payload["content"]] == ["text/plain", "text/html"]
    assert payload["reply_to"] == {"email": "m@example.org"}


def test_missing_api_key_never_raises(monkeypatch):
    sent = _capture(monkeypatch)
    result = EmailService(api_key="").send_email("a@example.org", "Hi", text="x")
    assert result.success is False
    assert "SENDGRID_API_KEY" in result.error
    assert sent == []


def test_http_error_is_reported(monkeypatch):
    _capture(monkeypatch, status_code=401)
    result = EmailService(api_key="SG.bad").send_email("a@example.org", "Hi", text="x")
    assert result.success is False
    assert result.message == "Failed to send email"
    assert "401" in result.error


def test_staff_notification_plain_text(monkeypatch):
    sent = _capture(monkeypatch)
    EmailService(api_key="SG.test").send_staff_notification(
        "a@example.org", "Update", "<p>Shift <b>changed</b></p>"
    )
    content = sent[0]["json"]["content"]
    assert content[0]["value"] == "Shift changed\n\n" + DEFAULT_FOOTER
    assert "Nuvanta Nurse Management" in content[1]["value"]


def test_schedule_notification_subject(monkeypatch):
    sent = _capture(monkeypatch)
    EmailService(api_key="SG.test").send_schedule_notification(
        "a@example.org", "Sarah", "<ul><li>Mon day</li></ul>", "2025-05-19", "2025-05-25"
    )
    assert sent[0]["json"]["subject"] == "Schedule Update: 2025-05-19 - 2025-05-25"
    assert "Hello Sarah" in sent[0]["json"]["content"][1]["value"]


def test_alert_notification_color_and_action(monkeypatch):
    sent = _capture(monkeypatch)
    EmailService(api_key="SG.test").send_alert_notification(
        "a@example.org", "Critical", "ICU short two nurses", True, "Call agency", "2025-05-18"
    )
    html = sent[0]["json"]["content"][1]["value"]
    assert "#f56565" in html
    assert "Action Required:</strong> Call agency" in html
    assert "Due Date:</strong> 2025-05-18" in html


def test_alert_subject_truncation():
    details = "x" * 45
    assert alert_subject("Important", details) == "Important Alert: " + "x" * 40 + "..."
    assert alert_subject("Informational", "short") == "Informational Alert: short"


def test_strip_tags():
    assert strip_tags("<p>a <i>b</i></p>") == "a b"
