from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of a user inside a course assignment."""

    TEACHER = "Teacher"
    STUDENT = "Student"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Backend sends both ``Student`` and ``STUDENT``."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown role: {value!r}")


class AttendanceStatus(str, Enum):
    """Common status values; records may carry others (e.g. ``Late``)."""

    PRESENT = "Present"
    ABSENT = "Absent"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC
