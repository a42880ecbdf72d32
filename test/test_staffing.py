from staffing import mock_data
from staffing.provider import DAY_SHIFT_REQUIRED, NIGHT_SHIFT_REQUIRED, StaffingDataProvider
from staffing.roster import dates_in_month, generate_monthly_schedule


def _provider():
    return StaffingDataProvider.from_mock_data("2025-05-17")


def test_dates_in_month():
    days = dates_in_month(2025, 2)
    assert len(days) == 28
    assert days[0].isoformat() == "2025-02-01"


def test_nurse_works_on_home_weekday():
    schedule = generate_monthly_schedule(mock_data.NURSES, 2025, 5)
    # 2025-05-17 is a Saturday; nurse 6 has home weekday 6 (Sunday = 0)
    assert any(a.nurse_id == 6 and a.date == "2025-05-17" and a.shift == "day" for a in schedule)
    # nurse 7 -> Sunday
    assert any(a.nurse_id == 7 and a.date == "2025-05-18" for a in schedule)


def test_assignments_use_nurse_shift():
    schedule = generate_monthly_schedule(mock_data.NURSES, 2025, 5)
    shifts = {n.id: n.shift for n in mock_data.NURSES}
    assert all(a.shift == shifts[a.nurse_id] for a in schedule)


def test_staffing_for_day_shortages():
    staffing = _provider().staffing_for_day("2025-05-17")
    assert staffing["dayRequired"] == DAY_SHIFT_REQUIRED
    assert staffing["nightRequired"] == NIGHT_SHIFT_REQUIRED
    assert staffing["dayShortage"] == max(0, DAY_SHIFT_REQUIRED - staffing["day"])
    assert staffing["nightShortage"] == max(0, NIGHT_SHIFT_REQUIRED - staffing["night"])


def test_staffing_by_unit_uses_unit_requirements():
    units = _provider().staffing_by_unit("2025-05-17")
    assert set(units) == {"Medical-Surgical", "Intensive Care", "Emergency", "Maternity"}
    assert units["Medical-Surgical"]["requiredDay"] == 6
    assert units["Maternity"]["requiredNight"] == 3

    total_day = sum(u["dayStaff"] for u in units.values())
    assert total_day == _provider().staffing_for_day("2025-05-17")["day"]


def test_upcoming_staffing():
    forecast = _provider().upcoming_staffing(days=3)
    assert [f["date"] for f in forecast] == ["2025-05-17", "2025-05-18", "2025-05-19"]
    assert forecast[0]["dayOfWeek"] == "Saturday"
    assert forecast[0]["fullDate"] == "May 17, 2025"
    assert forecast[0]["dayStaffing"]["status"] in {"full", "understaffed"}


def test_understaffed_days_only_lists_shortages():
    for entry in _provider().understaffed_days():
        assert entry["shortage"] > 0
        assert entry["shift"] in {"day", "night"}
        assert entry["date"].startswith("2025-05-")


def test_snapshot_and_burnout():
    provider = _provider()
    snap = provider.snapshot()
    assert snap["total"] == 26
    assert snap["dayShift"] == 14
    assert snap["nightShift"] == 12

    burnout = provider.burnout_risk()
    assert burnout["count"] == 2
    assert {"name": "Sarah Chen"} in burnout["staff"]
    assert burnout["lastUpdated"] == "2025-05-17"


def test_compliance_summary():
    summary = _provider().compliance_summary()
    assert summary["percentComplete"] == 65
    assert summary["description"].startswith("Quarterly staff performance report due")
    assert len(summary["reports"]) == len(mock_data.COMPLIANCE_REPORTS)


def test_context_summary():
    text = _provider().context_summary(open_tasks=5, overdue_tasks=3)
    assert "Total nurses: 26 (14 day shift, 12 night shift)" in text
    assert "Open follow-up tasks: 5 (3 overdue)" in text
    assert "Sarah Chen" in text
