"""Percentages with a first-class "not applicable" result.

A bucket with no records has no basis for a percentage. It reports
NOT_APPLICABLE ("N/A"), never 0%, so a course with zero recorded sessions
does not read as "0% attendance".
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Protocol, Union

from ..common.validators import require_non_negative
from ..core.constants import DEFAULT_PERCENT_PRECISION, NOT_APPLICABLE_LABEL


class Countable(Protocol):
    total: int
    matched: int


@dataclass(frozen=True)
class Percentage:
    value: float
    label: str

    @property
    def applicable(self) -> bool:
        return True


@dataclass(frozen=True)
class NotApplicable:
    label: str = NOT_APPLICABLE_LABEL
    value: Optional[float] = None

    @property
    def applicable(self) -> bool:
        return False


NOT_APPLICABLE = NotApplicable()

PercentageResult = Union[Percentage, NotApplicable]


def round_half_away(value: Decimal, precision: int) -> Decimal:
    # Decimal's ROUND_HALF_UP rounds ties away from zero
    return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)


def _make(value: Decimal, precision: int) -> Percentage:
    rounded = round_half_away(value, precision)
    return Percentage(value=float(rounded), label=f"{rounded:.{precision}f}%")


def to_percentage(bucket: Countable, precision: int = DEFAULT_PERCENT_PRECISION) -> PercentageResult:
    require_non_negative(precision, "precision")
    total = int(bucket.total)
    if total <= 0:
        return NOT_APPLICABLE

    raw = Decimal(int(bucket.matched)) * 100 / Decimal(total)
    clamped = min(max(raw, Decimal(0)), Decimal(100))
    return _make(clamped, precision)


def average_percentage(results: Iterable[PercentageResult], precision: int = DEFAULT_PERCENT_PRECISION) -> PercentageResult:
    """Mean of the applicable results; N/A when none is applicable."""

    require_non_negative(precision, "precision")
    values = [Decimal(str(r.value)) for r in results if r.applicable]
    if not values:
        return NOT_APPLICABLE
    return _make(sum(values) / len(values), precision)
