from datetime import datetime

from extraction.schedule_extractor import add_months, extract_names, extract_schedule

NOW = datetime(2025, 5, 17, 9, 30)


def test_weeks_from_prompt():
    s = extract_schedule("check in with Sarah in 2 weeks", "", now=NOW)
    assert s.date == datetime(2025, 5, 31, 9, 30)
    assert s.date_inferred is False


def test_days():
    s = extract_schedule("ping pharmacy after 3 days", "", now=NOW)
    assert s.date == datetime(2025, 5, 20, 9, 30)


def test_months_take_precedence_over_weeks():
    s = extract_schedule("in 2 weeks or maybe in 1 month", "", now=NOW)
    assert s.date == datetime(2025, 6, 17, 9, 30)


def test_prompt_checked_before_response_per_rule():
    s = extract_schedule("follow up in 5 days", "i'll remind you in 2 weeks", now=NOW)
    # weeks rule is evaluated before days, and matches in the response
    assert s.date == datetime(2025, 5, 31, 9, 30)


def test_no_expression_defaults_to_now():
    s = extract_schedule("remind me about the audit", "ok", now=NOW)
    assert s.date == NOW
    assert s.date_inferred is True


def test_add_months_clamps_day():
    assert add_months(datetime(2025, 1, 31), 1) == datetime(2025, 2, 28)
    assert add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)
    assert add_months(datetime(2025, 11, 15), 3) == datetime(2026, 2, 15)


def test_names_are_deduplicated_in_order():
    names = extract_names("check in with Sarah Chen and Michael", "talk to Michael and Sarah Chen")
    assert names == ["Sarah Chen", "Michael"]


def test_stop_words_are_skipped():
    assert extract_names("The nurse And I") == []


def test_out_of_range_amount_clamps_to_latest_date():
    weeks = extract_schedule("check in with Sarah in 500000 weeks", "", now=NOW)
    assert weeks.date == datetime.max
    assert weeks.date_inferred is False

    months = extract_schedule("review again in 200000 months", "", now=NOW)
    assert months.date == datetime.max


def test_non_ascii_digits_do_not_set_a_date():
    s = extract_schedule("follow up in ٣ days", "", now=NOW)
    assert s.date == NOW
    assert s.date_inferred is True
