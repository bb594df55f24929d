from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union

from ..core.enums import SortDirection

T = TypeVar("T")

Accessor = Union[str, Callable[[T], Any]]
Comparator = Callable[[T, T], int]


def field_value(row: Any, name: str) -> Any:
    """Read ``name`` from a mapping row or an attribute row; missing → None."""

    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


@dataclass(frozen=True)
class ColumnSpec(Generic[T]):
    """One table column.

    A column backed by a field name sorts on that field. A column backed by a
    function is only sortable when it also carries a ``comparator``: sorting
    on a rendered composite value would be ambiguous.
    """

    header: str
    accessor: Accessor
    comparator: Optional[Comparator] = None

    @property
    def key(self) -> str:
        return self.accessor if isinstance(self.accessor, str) else self.header

    @property
    def sortable(self) -> bool:
        return isinstance(self.accessor, str) or self.comparator is not None

    def value(self, row: T) -> Any:
        if isinstance(self.accessor, str):
            return field_value(row, self.accessor)
        return self.accessor(row)


@dataclass(frozen=True)
class SortSpec:
    column_key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    def toggle(self, column: ColumnSpec) -> "SortSpec":
        """Header click: same column flips, new column starts ascending.

        Clicking an unsortable column leaves the sort unchanged.
        """

        if not column.sortable:
            return self
        if self.column_key == column.key:
            return replace(self, direction=self.direction.flipped())
        return SortSpec(column_key=column.key, direction=SortDirection.ASC)


@dataclass(frozen=True)
class TableCell:
    key: str
    text: str


@dataclass(frozen=True)
class TableHeader:
    key: str
    label: str
    sortable: bool
    indicator: str = ""


@dataclass(frozen=True)
class TableView:
    headers: tuple[TableHeader, ...]
    rows: tuple[tuple[TableCell, ...], ...]
    empty_message: Optional[str] = None
