from __future__ import annotations

from datetime import date, time
from typing import Optional

import pytest

from attendance_reports.core.enums import Role
from attendance_reports.core.exceptions import DataSourceError
from attendance_reports.records.model import (
    AttendanceRecord,
    CourseAssignment,
    CourseRef,
    StudentRef,
    TeacherRef,
    TimetableEntry,
)


class InMemoryRecords:
    """Fake REST backend implementing every record source protocol."""

    def __init__(
        self,
        *,
        attendance=(),
        assignments=(),
        timetable=(),
        courses=(),
        teachers=(),
        students=(),
        failing_course_ids=(),
    ):
        self._attendance = list(attendance)
        self._assignments = list(assignments)
        self._timetable = list(timetable)
        self._courses = {c.id: c for c in courses}
        self._teachers = list(teachers)
        self._students = list(students)
        self._failing = set(failing_course_ids)
        self.course_lookups: list[int] = []

    def list_attendance(self):
        return list(self._attendance)

    def list_assignments(self):
        return list(self._assignments)

    def list_timetable(self):
        return list(self._timetable)

    def list_courses(self):
        return list(self._courses.values())

    def get_course(self, course_id: int) -> Optional[CourseRef]:
        self.course_lookups.append(course_id)
        if course_id in self._failing:
            raise DataSourceError(f"course {course_id} lookup failed")
        return self._courses.get(course_id)

    def list_teachers(self):
        return list(self._teachers)

    def list_students(self):
        return list(self._students)


def att(id: int, subject_id, course_id, day, status: str = "Present") -> AttendanceRecord:
    return AttendanceRecord(id=id, subject_id=subject_id, course_id=course_id, date=day, status=status)


@pytest.fixture
def fixed_today() -> date:
    # Wednesday, ISO week 14 of 2025
    return date(2025, 4, 2)


@pytest.fixture
def school(fixed_today) -> InMemoryRecords:
    """Teacher 7 teaches courses 1 and 2; students 100 and 101 take course 1."""

    records = [
        att(1, 100, 1, date(2025, 3, 24)),
        att(2, 100, 1, date(2025, 3, 26), "Absent"),
        att(3, 101, 1, date(2025, 3, 31), "present"),
        att(4, 101, 1, date(2025, 4, 1)),
        att(5, 102, 3, date(2025, 4, 1), "Absent"),
    ]
    assignments = [
        CourseAssignment(id=1, course_id=1, user_id=7, role=Role.TEACHER),
        CourseAssignment(id=2, course_id=2, user_id=7, role=Role.TEACHER),
        CourseAssignment(id=3, course_id=1, user_id=100, role=Role.STUDENT),
        CourseAssignment(id=4, course_id=2, user_id=100, role=Role.STUDENT),
        CourseAssignment(id=5, course_id=1, user_id=101, role=Role.STUDENT),
        CourseAssignment(id=6, course_id=3, user_id=8, role=Role.TEACHER),
    ]
    timetable = [
        TimetableEntry(id=10, date=fixed_today, start_time=time(13, 0), end_time=time(14, 30), teacher_id=7, course_id=2, classroom="B2"),
        TimetableEntry(id=11, date=fixed_today, start_time=time(9, 0), end_time=time(10, 30), teacher_id=7, course_id=1, classroom="A1"),
        TimetableEntry(id=12, date=date(2025, 4, 3), start_time=time(9, 0), end_time=time(10, 0), teacher_id=7, course_id=1, classroom="A1"),
        TimetableEntry(id=13, date=fixed_today, start_time=time(11, 0), end_time=time(12, 0), teacher_id=8, course_id=3, classroom="C3"),
    ]
    courses = [CourseRef(id=1, name="Calculus I"), CourseRef(id=3, name="Literature")]
    teachers = [TeacherRef(id=1, user_id=7, name="T. Nguyen"), TeacherRef(id=2, user_id=8, name="L. Tran")]
    students = [
        StudentRef(id=1, user_id=100, first_name="An"),
        StudentRef(id=2, user_id=101, first_name="Binh"),
        StudentRef(id=3, user_id=102, first_name="Chi"),
    ]
    return InMemoryRecords(
        attendance=records,
        assignments=assignments,
        timetable=timetable,
        courses=courses,
        teachers=teachers,
        students=students,
    )


@pytest.fixture
def backend_cls():
    return InMemoryRecords
