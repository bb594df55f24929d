from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, TypeVar

from ..common.datetime_utils import coerce_date, iso_week
from ..common.validators import require_positive
from ..core.constants import DEFAULT_TREND_WEEKS, WEEK_LABEL
from ..core.exceptions import MalformedRecordError
from ..grouping.engine import group

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class WeekBucket:
    week_label: str
    matched: int
    total: int
    iso_year: int
    iso_week: int


@dataclass(frozen=True)
class TrendReport:
    buckets: tuple[WeekBucket, ...]
    skipped: int = 0


def _record_date(record: Any) -> Any:
    return record.date


def collect_weekly_trend(
    records: Iterable[T],
    matches: Callable[[T], bool],
    week_count: int = DEFAULT_TREND_WEEKS,
    *,
    date_of: Callable[[T], Any] = _record_date,
) -> TrendReport:
    """Bucket records by ISO week and keep the most recent ``week_count`` weeks.

    Buckets are keyed by (ISO year, ISO week) so late-December/early-January
    dates order correctly. Weeks without data are never invented. Records
    with unparsable dates are skipped and counted.
    """

    require_positive(week_count, "week_count")

    dated: list[tuple[T, tuple[int, int]]] = []
    skipped = 0
    for record in records:
        try:
            dated.append((record, iso_week(coerce_date(date_of(record)))))
        except MalformedRecordError as e:
            skipped += 1
            logger.warning("Skipping record in weekly trend: %s", e)

    buckets = group(dated, key_of=lambda pair: pair[1], matches=lambda pair: matches(pair[0]))
    recent = sorted(buckets)[-week_count:]

    weeks = tuple(
        WeekBucket(
            week_label=WEEK_LABEL.format(week=week),
            matched=buckets[(year, week)].matched,
            total=buckets[(year, week)].total,
            iso_year=year,
            iso_week=week,
        )
        for year, week in recent
    )
    if skipped:
        logger.info("Weekly trend built from %d records, %d skipped", len(dated), skipped)
    return TrendReport(buckets=weeks, skipped=skipped)


def weekly_trend(
    records: Iterable[T],
    matches: Callable[[T], bool],
    week_count: int = DEFAULT_TREND_WEEKS,
    *,
    date_of: Callable[[T], Any] = _record_date,
) -> list[WeekBucket]:
    return list(collect_weekly_trend(records, matches, week_count, date_of=date_of).buckets)
