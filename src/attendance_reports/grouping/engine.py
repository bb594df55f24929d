"""Keyed grouping: fold a flat record collection into per-key counters."""
from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable, TypeVar

from ..core.exceptions import KeyExtractionError
from .model import AggregateBucket

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def group(
    records: Iterable[T],
    key_of: Callable[[T], K],
    matches: Callable[[T], bool],
    *,
    keys: Iterable[K] = (),
) -> dict[K, AggregateBucket]:
    """Group ``records`` by ``key_of`` and count totals and predicate matches.

    Every record lands in exactly one bucket, including records whose key is
    ``None``. Buckets iterate in first-seen key order; ``keys`` pre-seeds empty
    buckets (in the given order) so a key with no records still shows up with
    ``total == 0``.

    A failing ``key_of`` aborts the whole call with KeyExtractionError.
    """

    counters: dict[Any, list[int]] = {k: [0, 0] for k in keys}

    for index, record in enumerate(records):
        try:
            key = key_of(record)
        except Exception as e:
            raise KeyExtractionError(f"Key function failed on record #{index} ({record!r}): {e}") from e

        counter = counters.get(key)
        if counter is None:
            counter = counters[key] = [0, 0]
        counter[0] += 1
        if matches(record):
            counter[1] += 1

    return {k: AggregateBucket(key=k, total=c[0], matched=c[1]) for k, c in counters.items()}


def compose_keys(*key_fns: Callable[[T], Hashable]) -> Callable[[T], tuple]:
    """Tuple key over several derived keys, e.g. (course_id, subject_id)."""

    if not key_fns:
        raise ValueError("compose_keys needs at least one key function")

    def key_of(record: T) -> tuple:
        return tuple(fn(record) for fn in key_fns)

    return key_of


def count_distinct(records: Iterable[T], value_of: Callable[[T], Hashable]) -> int:
    return len({value_of(r) for r in records})
