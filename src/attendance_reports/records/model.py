from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Iterable, Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class AttendanceRecord:
    """One unit of expected attendance for a subject (student/user) in a course.

    ``date`` is a ``datetime.date`` when the payload parsed; otherwise the raw
    value is kept so derived computations can skip and count it.
    """

    id: int
    subject_id: Optional[int]
    course_id: Optional[int]
    date: Union[date, Any]
    status: str


@dataclass(frozen=True)
class CourseAssignment:
    id: int
    course_id: int
    user_id: int
    role: Role


@dataclass(frozen=True)
class TimetableEntry:
    id: int
    date: date
    start_time: time
    end_time: time
    teacher_id: int
    course_id: int
    classroom: str = ""


@dataclass(frozen=True)
class CourseRef:
    id: int
    name: str


@dataclass(frozen=True)
class TeacherRef:
    id: int
    user_id: Optional[int]
    name: str


@dataclass(frozen=True)
class StudentRef:
    id: int
    user_id: Optional[int]
    first_name: str
    last_name: str = ""


class RecordList(list):
    """A fetched collection together with the number of malformed rows dropped."""

    def __init__(self, items: Iterable[Any] = (), skipped: int = 0):
        super().__init__(items)
        self.skipped = skipped


def dropped_rows(*collections: Iterable[Any]) -> int:
    """Total malformed rows dropped while fetching ``collections``.

    Plain lists (e.g. from in-memory sources) count as zero.
    """

    return sum(getattr(c, "skipped", 0) for c in collections)
