from datetime import datetime

from scheduling.event_builder import (
    DEFAULT_TITLE,
    build_event,
    derive_priority,
    derive_title,
)

NOW = datetime(2025, 5, 17, 8, 0)


def test_check_in_with_names():
    event = build_event("check in with Sarah Chen in 2 weeks", "ok", now=NOW)
    assert event.title == "Check in with Sarah Chen"
    assert event.related_to == "Sarah Chen"
    assert event.event_date == datetime(2025, 5, 31, 8, 0)
    assert event.description == "check in with Sarah Chen in 2 weeks"
    assert event.reminder is True
    assert event.priority == "medium"


def test_follow_up_with_names():
    assert derive_title("follow-up with Michael tomorrow", "", ["Michael"]) == "Follow up with Michael"


def test_check_in_without_names_falls_through():
    assert derive_title("check in with the night team", "", []) == DEFAULT_TITLE


def test_reminder_object_from_prompt():
    event = build_event("remind me to review the budget in 3 days.", "", now=NOW)
    assert event.title == "Reminder: review the budget in 3 days"


def test_reminder_object_from_response():
    title = derive_title("please remind me", "i'll remind you about the staff meeting.", [])
    assert title == "Reminder: the staff meeting"


def test_reminder_without_object():
    assert derive_title("remind me", "sure", []) == "Reminder from Nuvanta"


def test_default_title():
    assert derive_title("the audit moved", "added to your calendar", []) == DEFAULT_TITLE


def test_priority():
    assert derive_priority("this is urgent", "") == "high"
    assert derive_priority("", "high priority item") == "high"
    assert derive_priority("whenever you can", "") == "low"
    assert derive_priority("low priority", "") == "low"
    assert derive_priority("routine check", "") == "medium"


def test_high_wins_over_low():
    assert derive_priority("important but whenever", "") == "high"
    # "not urgent" still contains "urgent"
    assert derive_priority("not urgent", "") == "high"


def test_priority_words_match_as_prefixes():
    assert derive_priority("urgently check in with Sarah", "") == "high"
    assert derive_priority("", "this is critically short-staffed") == "high"
    assert derive_priority("importantly, call pharmacy", "") == "high"
    assert derive_priority("whenever's fine", "") == "low"
