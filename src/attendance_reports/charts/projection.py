"""Shape aggregates into the ``{labels, values}`` form chart surfaces consume.

Charts cannot draw "N/A" as a bar height, so N/A percentages become 0 here
and only here. Aggregates and tables keep the N/A distinction.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, TypeVar

from ..core.constants import DEFAULT_PERCENT_PRECISION
from ..trends.percentage import Countable, to_percentage

B = TypeVar("B", bound=Countable)


@dataclass(frozen=True)
class ChartSeries:
    labels: tuple[str, ...]
    values: tuple[float, ...]

    def to_chart_data(self, dataset_label: str) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [{"label": dataset_label, "data": list(self.values)}],
        }


def to_series(
    buckets: Iterable[B],
    label_of: Callable[[B], str],
    *,
    precision: int = DEFAULT_PERCENT_PRECISION,
) -> ChartSeries:
    labels: list[str] = []
    values: list[float] = []
    for bucket in buckets:
        pct = to_percentage(bucket, precision)
        labels.append(label_of(bucket))
        values.append(pct.value if pct.applicable else 0.0)
    return ChartSeries(labels=tuple(labels), values=tuple(values))


def to_count_series(counts: Mapping[str, int]) -> ChartSeries:
    """Categorical counts (e.g. Present/Absent) in mapping order."""

    return ChartSeries(labels=tuple(counts), values=tuple(float(v) for v in counts.values()))
