from prometheus_client import Counter, Histogram, REGISTRY


# Re-use already registered collectors so hot reloads and repeated test imports don't fail.
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "nurse_requests_total",
    "Total API requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "nurse_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

TASK_COMPLETIONS_TOTAL = get_or_create_metric(
    "nurse_task_completions_total",
    "Task completion attempts by outcome",
    Counter,
    labelnames=["outcome"],
)

CALENDAR_EVENTS_CREATED_TOTAL = get_or_create_metric(
    "nurse_calendar_events_created_total",
    "Calendar events synthesized from copilot conversations",
    Counter,
)

LLM_CALLS_TOTAL = get_or_create_metric(
    "nurse_llm_calls_total",
    "LLM completion calls",
    Counter,
    labelnames=["provider", "status"],
)

EMAILS_SENT_TOTAL = get_or_create_metric(
    "nurse_emails_sent_total",
    "Outgoing emails",
    Counter,
    labelnames=["status"],
)
