"""Build immutable records from the flat JSON rows the REST backend returns.

Each ``*_from_payload`` raises MalformedRecordError for a row it cannot use;
``load_many`` turns that into a skip count so one bad row never sinks a
whole collection.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from ..common.datetime_utils import coerce_date, parse_iso_time
from ..core.enums import Role
from ..core.exceptions import MalformedRecordError
from .model import AttendanceRecord, CourseAssignment, CourseRef, StudentRef, TeacherRef, TimetableEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    items: tuple[T, ...]
    skipped: int = 0


def _require(payload: Mapping[str, Any], field: str) -> Any:
    if field not in payload or payload[field] is None:
        raise MalformedRecordError(f"Missing field {field!r} in {dict(payload)!r}")
    return payload[field]


def _to_int(value: Any, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedRecordError(f"Field {field!r} is not a number: {value!r}") from e


def _optional_int(value: Any, field: str):
    return None if value is None else _to_int(value, field)


def attendance_from_payload(payload: Mapping[str, Any]) -> AttendanceRecord:
    raw_date = payload.get("date")
    try:
        record_date = coerce_date(raw_date)
    except MalformedRecordError:
        # kept as-is: still counts toward totals, skipped by date-based views
        record_date = raw_date

    return AttendanceRecord(
        id=_to_int(_require(payload, "id"), "id"),
        subject_id=_optional_int(payload.get("userId"), "userId"),
        course_id=_optional_int(payload.get("courseId"), "courseId"),
        date=record_date,
        status=str(payload.get("status") or ""),
    )


def assignment_from_payload(payload: Mapping[str, Any]) -> CourseAssignment:
    try:
        role = Role.parse(_require(payload, "role"))
    except ValueError as e:
        raise MalformedRecordError(str(e)) from e

    return CourseAssignment(
        id=_to_int(_require(payload, "id"), "id"),
        course_id=_to_int(_require(payload, "courseId"), "courseId"),
        user_id=_to_int(_require(payload, "userId"), "userId"),
        role=role,
    )


def timetable_from_payload(payload: Mapping[str, Any]) -> TimetableEntry:
    try:
        start_time = parse_iso_time(str(_require(payload, "startTime")))
        end_time = parse_iso_time(str(_require(payload, "endTime")))
    except ValueError as e:
        raise MalformedRecordError(f"Unparsable time in {dict(payload)!r}") from e

    return TimetableEntry(
        id=_to_int(_require(payload, "id"), "id"),
        date=coerce_date(_require(payload, "date")),
        start_time=start_time,
        end_time=end_time,
        teacher_id=_to_int(_require(payload, "teacherId"), "teacherId"),
        course_id=_to_int(_require(payload, "courseId"), "courseId"),
        classroom=str(payload.get("classroom") or ""),
    )


def course_from_payload(payload: Mapping[str, Any]) -> CourseRef:
    return CourseRef(
        id=_to_int(_require(payload, "id"), "id"),
        name=str(_require(payload, "name")),
    )


def teacher_from_payload(payload: Mapping[str, Any]) -> TeacherRef:
    return TeacherRef(
        id=_to_int(_require(payload, "id"), "id"),
        user_id=_optional_int(payload.get("userId"), "userId"),
        name=str(payload.get("name") or ""),
    )


def student_from_payload(payload: Mapping[str, Any]) -> StudentRef:
    return StudentRef(
        id=_to_int(_require(payload, "id"), "id"),
        user_id=_optional_int(payload.get("userId"), "userId"),
        first_name=str(payload.get("firstName") or ""),
        last_name=str(payload.get("lastName") or ""),
    )


def load_many(payloads: Iterable[Mapping[str, Any]], parse: Callable[[Mapping[str, Any]], T]) -> LoadResult[T]:
    items: list[T] = []
    skipped = 0
    for payload in payloads:
        try:
            items.append(parse(payload))
        except MalformedRecordError as e:
            skipped += 1
            logger.warning("Skipping malformed record: %s", e)
    return LoadResult(items=tuple(items), skipped=skipped)
