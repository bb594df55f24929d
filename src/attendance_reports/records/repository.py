from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, CourseAssignment, CourseRef, StudentRef, TeacherRef, TimetableEntry


class AttendanceSource(Protocol):
    def list_attendance(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError


class CourseAssignmentSource(Protocol):
    def list_assignments(self) -> Sequence[CourseAssignment]:
        raise NotImplementedError


class TimetableSource(Protocol):
    def list_timetable(self) -> Sequence[TimetableEntry]:
        raise NotImplementedError


class CourseSource(Protocol):
    def get_course(self, course_id: int) -> Optional[CourseRef]:
        """Return None when the backend has no such course."""

        raise NotImplementedError

    def list_courses(self) -> Sequence[CourseRef]:
        raise NotImplementedError


class PeopleSource(Protocol):
    def list_teachers(self) -> Sequence[TeacherRef]:
        raise NotImplementedError

    def list_students(self) -> Sequence[StudentRef]:
        raise NotImplementedError
