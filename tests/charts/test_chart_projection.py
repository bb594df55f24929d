from __future__ import annotations

from attendance_reports.charts.projection import to_count_series, to_series
from attendance_reports.grouping.model import AggregateBucket
from attendance_reports.trends.weekly import WeekBucket


def test_not_applicable_becomes_zero_and_order_is_kept():
    buckets = [
        AggregateBucket(key=3, total=4, matched=3),
        AggregateBucket(key=1, total=0, matched=0),
        AggregateBucket(key=2, total=2, matched=1),
    ]

    series = to_series(buckets, lambda b: f"Course {b.key}")

    assert series.labels == ("Course 3", "Course 1", "Course 2")
    assert series.values == (75.0, 0.0, 50.0)


def test_week_buckets_chart():
    weeks = [
        WeekBucket(week_label="W13", matched=1, total=3, iso_year=2025, iso_week=13),
        WeekBucket(week_label="W14", matched=2, total=2, iso_year=2025, iso_week=14),
    ]

    series = to_series(weeks, lambda w: w.week_label, precision=0)

    assert series.labels == ("W13", "W14")
    assert series.values == (33.0, 100.0)


def test_chart_data_shape():
    series = to_count_series({"Present": 5, "Absent": 2})

    assert series.to_chart_data("Attendance") == {
        "labels": ["Present", "Absent"],
        "datasets": [{"label": "Attendance", "data": [5.0, 2.0]}],
    }


def test_empty_series():
    series = to_series([], lambda b: str(b.key))

    assert series.labels == ()
    assert series.values == ()
