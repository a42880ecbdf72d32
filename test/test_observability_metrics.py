import importlib

from fastapi.testclient import TestClient

from api import state
from api.metrics import get_or_create_metric
from prometheus_client import Counter
from storage.task_repository import InMemoryTaskRepository


def _import_app():
    # Import lazily so environment variables (if any) can be set before import.
    mod = importlib.import_module("api.main")
    return mod


def test_metrics_endpoint_exposes_prometheus_text() -> None:
    client = TestClient(_import_app().app)

    r = client.get("/metrics")
    assert r.status_code == 200
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "nurse_requests_total" in body
    assert "nurse_request_latency_seconds" in body
    assert "nurse_calendar_events_created_total" in body


def test_completion_outcomes_are_counted(monkeypatch) -> None:
    monkeypatch.setattr(state, "task_repository", InMemoryTaskRepository.seeded())
    client = TestClient(_import_app().app)

    r = client.post("/api/followups/complete-from-text", json={"prompt": "mark task #77 as done"})
    assert r.json()["outcome"] == "not_found"

    body = client.get("/metrics").text
    assert 'nurse_task_completions_total{outcome="not_found"}' in body
    assert 'nurse_requests_total{endpoint="/api/followups/complete-from-text",status="not_found"}' in body


def test_get_or_create_metric_reuses_collector() -> None:
    first = get_or_create_metric("nurse_test_reuse_total", "test", Counter)
    second = get_or_create_metric("nurse_test_reuse_total", "test", Counter)
    assert first is second
