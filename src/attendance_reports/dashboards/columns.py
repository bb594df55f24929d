"""Column definitions shared by the dashboard tables."""
from __future__ import annotations

from datetime import date

from ..records.model import AttendanceRecord
from ..table.model import ColumnSpec
from .model import CourseAttendanceTotal, ScheduleRow


def date_text(row: AttendanceRecord) -> str:
    value = row.date
    return value.isoformat() if isinstance(value, date) else ("" if value is None else str(value))


def compare_dates(a: AttendanceRecord, b: AttendanceRecord) -> int:
    # ISO text orders chronologically and tolerates unparsed raw values
    ka, kb = date_text(a), date_text(b)
    return (ka > kb) - (ka < kb)


def _percentage_key(row: CourseAttendanceTotal) -> float:
    # N/A ranks below 0%
    return row.percentage.value if row.percentage.applicable else -1.0


def compare_percentage(a: CourseAttendanceTotal, b: CourseAttendanceTotal) -> int:
    ka, kb = _percentage_key(a), _percentage_key(b)
    return (ka > kb) - (ka < kb)


ATTENDANCE_COLUMNS: list[ColumnSpec[AttendanceRecord]] = [
    ColumnSpec("Date", date_text, comparator=compare_dates),
    ColumnSpec("Course", "course_id"),
    ColumnSpec("Student", "subject_id"),
    ColumnSpec("Status", "status"),
]

COURSE_TOTAL_COLUMNS: list[ColumnSpec[CourseAttendanceTotal]] = [
    ColumnSpec("Course", "course_name"),
    ColumnSpec("Attended", "attended"),
    ColumnSpec("Total", lambda r: r.total),
    ColumnSpec("Percentage", lambda r: r.percentage.label, comparator=compare_percentage),
]

SCHEDULE_COLUMNS: list[ColumnSpec[ScheduleRow]] = [
    ColumnSpec("Course", "course_name"),
    ColumnSpec("Time", "time"),
    ColumnSpec("Room", "room"),
]

TIMETABLE_COLUMNS: list[ColumnSpec[ScheduleRow]] = [
    ColumnSpec("Course", "course_name"),
    ColumnSpec("Time", "time"),
    ColumnSpec("Teacher", "teacher_id"),
    ColumnSpec("Room", "room"),
]
