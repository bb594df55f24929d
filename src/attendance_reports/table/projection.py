"""Filter and sort arbitrary row collections for display.

Filtering runs before sorting; both work on copies and never touch the
caller's list.
"""
from __future__ import annotations

from functools import cmp_to_key
from numbers import Real
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from ..core.constants import NO_RECORDS_MESSAGE
from ..core.enums import SortDirection
from ..core.exceptions import ColumnSpecError
from .model import ColumnSpec, SortSpec, TableCell, TableHeader, TableView

T = TypeVar("T")

SORT_INDICATORS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}


def _default_sort_key(value: Any) -> tuple:
    # None < numbers < text < anything else (grouped by type name)
    if value is None:
        return (0,)
    if isinstance(value, Real):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, type(value).__name__, value)


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


def filter_rows(
    rows: Iterable[T],
    filter_text: str,
    searchable: Callable[[T], Iterable[Any]],
) -> list[T]:
    """Rows whose searchable values contain ``filter_text``, ignoring case.

    The filter text is used verbatim (surrounding spaces included); an empty
    filter keeps every row.
    """

    needle = (filter_text or "").lower()
    if not needle:
        return list(rows)
    return [row for row in rows if any(needle in _cell_text(v).lower() for v in searchable(row))]


def find_column(columns: Sequence[ColumnSpec[T]], column_key: str) -> ColumnSpec[T]:
    for col in columns:
        if col.key == column_key:
            return col
    raise ColumnSpecError(f"No column with key {column_key!r}")


def sort_rows(rows: Iterable[T], columns: Sequence[ColumnSpec[T]], sort: SortSpec) -> list[T]:
    out = list(rows)
    if sort.column_key is None:
        return out

    col = find_column(columns, sort.column_key)
    if not col.sortable:
        return out

    reverse = sort.direction == SortDirection.DESC
    # list.sort is stable in both directions
    if col.comparator is not None:
        out.sort(key=cmp_to_key(col.comparator), reverse=reverse)
    else:
        out.sort(key=lambda row: _default_sort_key(col.value(row)), reverse=reverse)
    return out


def project(
    rows: Iterable[T],
    columns: Sequence[ColumnSpec[T]],
    filter_text: str = "",
    sort: Optional[SortSpec] = None,
    *,
    searchable: Optional[Callable[[T], Iterable[Any]]] = None,
) -> list[T]:
    """Filter then sort ``rows``; returns a new list.

    ``searchable`` yields the values a row is matched against. It defaults to
    every column's value.
    """

    search = searchable or (lambda row: [col.value(row) for col in columns])
    filtered = filter_rows(rows, filter_text, search)
    return sort_rows(filtered, columns, sort or SortSpec())


def render_table(
    rows: Sequence[T],
    columns: Sequence[ColumnSpec[T]],
    sort: Optional[SortSpec] = None,
    *,
    row_id: Callable[[T], Any],
) -> TableView:
    """String cells keyed ``header-rowid`` plus header sort indicators.

    ``rows`` should already be projected.
    """

    sort = sort or SortSpec()
    headers = tuple(
        TableHeader(
            key=col.key,
            label=col.header,
            sortable=col.sortable,
            indicator=SORT_INDICATORS[sort.direction] if col.sortable and col.key == sort.column_key else "",
        )
        for col in columns
    )
    body = tuple(
        tuple(TableCell(key=f"{col.header}-{row_id(row)}", text=_cell_text(col.value(row))) for col in columns)
        for row in rows
    )
    return TableView(headers=headers, rows=body, empty_message=None if body else NO_RECORDS_MESSAGE)
