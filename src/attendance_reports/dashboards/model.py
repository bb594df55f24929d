from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..charts.projection import ChartSeries
from ..trends.percentage import PercentageResult
from ..trends.weekly import WeekBucket


@dataclass(frozen=True)
class CourseAttendanceTotal:
    course_id: Optional[int]
    course_name: str
    attended: int
    total: int
    percentage: PercentageResult
    student_count: int = 0

    @property
    def matched(self) -> int:
        return self.attended


@dataclass(frozen=True)
class ScheduleRow:
    """Timetable entry enriched for display."""

    id: int
    course_id: int
    course_name: str
    time: str
    room: str
    start_time: time
    teacher_id: Optional[int] = None


@dataclass(frozen=True)
class TeacherDashboard:
    teacher_id: int
    day: date
    courses_taught: int
    total_students: int
    today_classes: tuple[ScheduleRow, ...]
    course_totals: tuple[CourseAttendanceTotal, ...]
    trend: tuple[WeekBucket, ...]
    trend_chart: ChartSeries
    skipped_records: int = 0
    dropped_records: int = 0


@dataclass(frozen=True)
class StudentDashboard:
    student_id: int
    day: date
    total_classes: int
    attended: int
    overall_percentage: PercentageResult
    today_classes: tuple[ScheduleRow, ...]
    course_totals: tuple[CourseAttendanceTotal, ...]
    trend: tuple[WeekBucket, ...]
    trend_chart: ChartSeries
    skipped_records: int = 0
    dropped_records: int = 0


@dataclass(frozen=True)
class AdminDashboard:
    day: date
    total_students: int
    total_teachers: int
    total_courses: int
    today_classes: tuple[ScheduleRow, ...]
    present: int
    absent: int
    average_attendance: PercentageResult
    course_breakdown: tuple[CourseAttendanceTotal, ...]
    overview_chart: ChartSeries
    distribution_chart: ChartSeries
    course_chart: ChartSeries
    dropped_records: int = 0


@dataclass(frozen=True)
class DaySchedule:
    day: date
    classes: tuple[ScheduleRow, ...]


@dataclass(frozen=True)
class AttendanceSummary:
    """Per-course totals over the records matching a search text.

    ``present_chart`` plots the present count of each course in ``courses``.
    """

    filter_text: str
    record_count: int
    present: int
    courses: tuple[CourseAttendanceTotal, ...]
    present_chart: ChartSeries
    dropped_records: int = 0
