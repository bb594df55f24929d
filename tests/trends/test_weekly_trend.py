from __future__ import annotations

from datetime import date, timedelta

import pytest

from attendance_reports.core.exceptions import ValidationError
from attendance_reports.records.model import AttendanceRecord
from attendance_reports.records.predicates import status_is
from attendance_reports.trends.percentage import to_percentage
from attendance_reports.trends.weekly import collect_weekly_trend, weekly_trend

is_present = status_is("Present")


def _rec(id: int, day, status: str = "Present") -> AttendanceRecord:
    return AttendanceRecord(id=id, subject_id=1, course_id=1, date=day, status=status)


def test_keeps_the_four_most_recent_weeks_in_order():
    # Mondays of ISO weeks 2..11 of 2025, fed newest first
    mondays = [date(2025, 1, 6) + timedelta(weeks=i) for i in range(10)]
    records = [_rec(i, d) for i, d in enumerate(reversed(mondays))]

    buckets = weekly_trend(records, is_present, week_count=4)

    assert [b.week_label for b in buckets] == ["W8", "W9", "W10", "W11"]
    assert all(b.total == 1 for b in buckets)


def test_fewer_weeks_than_requested_are_not_padded():
    records = [_rec(1, date(2025, 3, 3)), _rec(2, date(2025, 3, 4), "Absent"), _rec(3, date(2025, 3, 12))]

    buckets = weekly_trend(records, is_present, week_count=4)

    assert len(buckets) == 2
    assert (buckets[0].total, buckets[0].matched) == (2, 1)
    assert to_percentage(buckets[0]).label == "50.0%"


def test_year_boundary_orders_by_iso_year_then_week():
    records = [
        _rec(1, date(2025, 1, 6)),   # 2025-W02
        _rec(2, date(2024, 12, 30)),  # 2025-W01 by the Thursday rule
        _rec(3, date(2024, 12, 23)),  # 2024-W52
    ]

    buckets = weekly_trend(records, is_present, week_count=3)

    assert [(b.iso_year, b.iso_week) for b in buckets] == [(2024, 52), (2025, 1), (2025, 2)]
    assert [b.week_label for b in buckets] == ["W52", "W1", "W2"]


def test_unparsable_dates_are_skipped_and_counted():
    records = [_rec(1, "2025-04-01"), _rec(2, "not-a-date"), _rec(3, None), _rec(4, date(2025, 4, 2), "Absent")]

    report = collect_weekly_trend(records, is_present)

    assert report.skipped == 2
    assert len(report.buckets) == 1
    assert (report.buckets[0].total, report.buckets[0].matched) == (2, 1)


def test_empty_input_gives_no_weeks():
    assert weekly_trend([], is_present) == []


def test_week_count_must_be_positive():
    with pytest.raises(ValidationError):
        weekly_trend([_rec(1, date(2025, 4, 1))], is_present, week_count=0)
