from __future__ import annotations

from typing import Callable

from .model import AttendanceRecord


def status_is(status: str) -> Callable[[AttendanceRecord], bool]:
    """Case-insensitive status match (``present`` == ``Present``)."""

    wanted = status.strip().lower()

    def matches(record: AttendanceRecord) -> bool:
        return (record.status or "").strip().lower() == wanted

    return matches
