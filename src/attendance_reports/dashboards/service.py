from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Hashable, Iterable, Optional, Sequence

from ..charts.projection import ChartSeries, to_count_series, to_series
from ..common.datetime_utils import today_local
from ..common.validators import require_non_negative, require_positive
from ..core.constants import (
    COURSE_PLACEHOLDER,
    DEFAULT_PERCENT_PRECISION,
    DEFAULT_PRESENT_STATUS,
    DEFAULT_TREND_WEEKS,
    UNKNOWN_COURSE,
)
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import DataSourceError
from ..grouping.engine import compose_keys, count_distinct, group
from ..records.model import AttendanceRecord, CourseRef, TimetableEntry, dropped_rows
from ..records.predicates import status_is
from ..records.repository import AttendanceSource, CourseAssignmentSource, CourseSource, PeopleSource, TimetableSource
from ..table.model import SortSpec, TableView
from ..table.projection import filter_rows, project, render_table
from ..trends.percentage import average_percentage, to_percentage
from ..trends.weekly import collect_weekly_trend
from .columns import ATTENDANCE_COLUMNS
from .model import (
    AdminDashboard,
    AttendanceSummary,
    CourseAttendanceTotal,
    DaySchedule,
    ScheduleRow,
    StudentDashboard,
    TeacherDashboard,
)

logger = logging.getLogger(__name__)


def _unique(values: Iterable[Hashable]) -> list:
    return list(dict.fromkeys(values))


def _search_values(record: AttendanceRecord) -> tuple:
    return (record.date, record.status)


class CourseDirectory:
    """Lazy course-name lookup.

    Unknown ids and lookup failures degrade to ``Course {id}``; they never
    raise. One directory lives for one dashboard build.
    """

    def __init__(self, courses: CourseSource, *, known: Iterable[CourseRef] = ()):
        self._courses = courses
        self._names: dict[int, str] = {c.id: c.name for c in known if c.name}

    def name_of(self, course_id: Optional[int]) -> str:
        if course_id is None:
            return UNKNOWN_COURSE
        if course_id in self._names:
            return self._names[course_id]

        ref = None
        try:
            ref = self._courses.get_course(course_id)
        except DataSourceError as e:
            logger.warning("Failed to fetch course name for ID %s: %s", course_id, e)

        name = ref.name if ref and ref.name else COURSE_PLACEHOLDER.format(id=course_id)
        self._names[course_id] = name
        return name


class DashboardService:
    def __init__(
        self,
        attendance: AttendanceSource,
        assignments: CourseAssignmentSource,
        timetable: TimetableSource,
        courses: CourseSource,
        people: PeopleSource,
        *,
        present_status: str = DEFAULT_PRESENT_STATUS,
        trend_weeks: int = DEFAULT_TREND_WEEKS,
        precision: int = DEFAULT_PERCENT_PRECISION,
    ):
        self._attendance = attendance
        self._assignments = assignments
        self._timetable = timetable
        self._courses = courses
        self._people = people
        self._is_present = status_is(present_status)
        self._trend_weeks = require_positive(int(trend_weeks), "trend_weeks")
        self._precision = require_non_negative(int(precision), "precision")

    def _course_totals(
        self,
        records: Sequence[AttendanceRecord],
        course_ids: Sequence[int],
        directory: CourseDirectory,
    ) -> tuple[CourseAttendanceTotal, ...]:
        buckets = group(records, key_of=lambda r: r.course_id, matches=self._is_present, keys=course_ids)
        per_student = group(
            (r for r in records if r.subject_id is not None),
            key_of=compose_keys(lambda r: r.course_id, lambda r: r.subject_id),
            matches=self._is_present,
        )
        students: dict[Optional[int], int] = {}
        for course_id, _ in per_student:
            students[course_id] = students.get(course_id, 0) + 1

        return tuple(
            CourseAttendanceTotal(
                course_id=b.key,
                course_name=directory.name_of(b.key),
                attended=b.matched,
                total=b.total,
                percentage=to_percentage(b, self._precision),
                student_count=students.get(b.key, 0),
            )
            for b in buckets.values()
        )

    def _schedule_rows(self, entries: Iterable[TimetableEntry], directory: CourseDirectory) -> tuple[ScheduleRow, ...]:
        ordered = sorted(entries, key=lambda e: e.start_time)
        return tuple(
            ScheduleRow(
                id=e.id,
                course_id=e.course_id,
                course_name=directory.name_of(e.course_id),
                time=f"{e.start_time:%H:%M} - {e.end_time:%H:%M}",
                room=e.classroom,
                start_time=e.start_time,
                teacher_id=e.teacher_id,
            )
            for e in ordered
        )

    def _by_day(
        self,
        timetable: Iterable[TimetableEntry],
        directory: CourseDirectory,
        include: Callable[[TimetableEntry], bool],
    ) -> tuple[DaySchedule, ...]:
        days: dict[date, list[TimetableEntry]] = {}
        for entry in timetable:
            if include(entry):
                days.setdefault(entry.date, []).append(entry)
        return tuple(DaySchedule(day=d, classes=self._schedule_rows(days[d], directory)) for d in sorted(days))

    def _today_classes(
        self,
        timetable: Iterable[TimetableEntry],
        today: date,
        directory: CourseDirectory,
        include: Callable[[TimetableEntry], bool],
    ) -> tuple[ScheduleRow, ...]:
        return self._schedule_rows((e for e in timetable if e.date == today and include(e)), directory)

    @staticmethod
    def _assigned_courses(assignments: Iterable, user_id: int, role: Role) -> list[int]:
        return _unique(a.course_id for a in assignments if a.user_id == user_id and a.role == role)

    def teacher_dashboard(self, teacher_id: int, *, today: Optional[date] = None) -> TeacherDashboard:
        today = today or today_local()
        directory = CourseDirectory(self._courses)

        assignments = self._assignments.list_assignments()
        fetched = self._attendance.list_attendance()
        timetable = self._timetable.list_timetable()

        course_ids = self._assigned_courses(assignments, teacher_id, Role.TEACHER)
        taught = set(course_ids)
        records = [r for r in fetched if r.course_id in taught]

        trend = collect_weekly_trend(records, self._is_present, self._trend_weeks)
        return TeacherDashboard(
            teacher_id=teacher_id,
            day=today,
            courses_taught=len(course_ids),
            total_students=count_distinct((r for r in records if r.subject_id is not None), lambda r: r.subject_id),
            today_classes=self._today_classes(timetable, today, directory, lambda e: e.teacher_id == teacher_id),
            course_totals=self._course_totals(records, course_ids, directory),
            trend=trend.buckets,
            trend_chart=to_series(trend.buckets, lambda b: b.week_label, precision=self._precision),
            skipped_records=trend.skipped,
            dropped_records=dropped_rows(assignments, fetched, timetable),
        )

    def student_dashboard(self, student_id: int, *, today: Optional[date] = None) -> StudentDashboard:
        today = today or today_local()
        directory = CourseDirectory(self._courses)

        assignments = self._assignments.list_assignments()
        fetched = self._attendance.list_attendance()
        timetable = self._timetable.list_timetable()

        course_ids = self._assigned_courses(assignments, student_id, Role.STUDENT)
        enrolled = set(course_ids)
        records = [r for r in fetched if r.subject_id == student_id]

        overall = group(records, key_of=lambda r: student_id, matches=self._is_present, keys=[student_id])[student_id]
        trend = collect_weekly_trend(records, self._is_present, self._trend_weeks)
        return StudentDashboard(
            student_id=student_id,
            day=today,
            total_classes=overall.total,
            attended=overall.matched,
            overall_percentage=to_percentage(overall, self._precision),
            today_classes=self._today_classes(timetable, today, directory, lambda e: e.course_id in enrolled),
            course_totals=self._course_totals(records, course_ids, directory),
            trend=trend.buckets,
            trend_chart=to_series(trend.buckets, lambda b: b.week_label, precision=self._precision),
            skipped_records=trend.skipped,
            dropped_records=dropped_rows(assignments, fetched, timetable),
        )

    def admin_dashboard(self, *, today: Optional[date] = None) -> AdminDashboard:
        today = today or today_local()

        courses = self._courses.list_courses()
        students = self._people.list_students()
        teachers = self._people.list_teachers()
        records = self._attendance.list_attendance()
        timetable = self._timetable.list_timetable()
        directory = CourseDirectory(self._courses, known=courses)

        overall = group(records, key_of=lambda r: None, matches=self._is_present, keys=[None])[None]
        breakdown = self._course_totals(records, [], directory)

        return AdminDashboard(
            day=today,
            total_students=len(students),
            total_teachers=len(teachers),
            total_courses=len(courses),
            today_classes=self._today_classes(timetable, today, directory, lambda e: True),
            present=overall.matched,
            absent=overall.unmatched,
            average_attendance=average_percentage((t.percentage for t in breakdown), self._precision),
            course_breakdown=breakdown,
            overview_chart=to_count_series(
                {"Students": len(students), "Teachers": len(teachers), "Courses": len(courses)}
            ),
            distribution_chart=to_count_series(
                {AttendanceStatus.PRESENT.value: overall.matched, AttendanceStatus.ABSENT.value: overall.unmatched}
            ),
            course_chart=to_series(breakdown, lambda t: t.course_name, precision=self._precision),
            dropped_records=dropped_rows(courses, students, teachers, records, timetable),
        )

    def teacher_timetable(self, teacher_id: int) -> tuple[DaySchedule, ...]:
        """The teacher's classes grouped by day, days in date order."""

        directory = CourseDirectory(self._courses)
        return self._by_day(self._timetable.list_timetable(), directory, lambda e: e.teacher_id == teacher_id)

    def student_timetable(self, student_id: int) -> tuple[DaySchedule, ...]:
        """Classes of the student's enrolled courses grouped by day."""

        directory = CourseDirectory(self._courses)
        enrolled = set(self._assigned_courses(self._assignments.list_assignments(), student_id, Role.STUDENT))
        return self._by_day(self._timetable.list_timetable(), directory, lambda e: e.course_id in enrolled)

    def attendance_summary(self, *, filter_text: str = "") -> AttendanceSummary:
        """Filter records on date/status text, then total the matches per course."""

        directory = CourseDirectory(self._courses)
        fetched = self._attendance.list_attendance()
        matching = filter_rows(fetched, filter_text, _search_values)

        courses = self._course_totals(matching, [], directory)
        return AttendanceSummary(
            filter_text=filter_text,
            record_count=len(matching),
            present=sum(c.attended for c in courses),
            courses=courses,
            present_chart=ChartSeries(
                labels=tuple(c.course_name for c in courses),
                values=tuple(float(c.attended) for c in courses),
            ),
            dropped_records=dropped_rows(fetched),
        )

    def attendance_table(
        self,
        *,
        filter_text: str = "",
        sort: Optional[SortSpec] = None,
    ) -> tuple[list[AttendanceRecord], TableView]:
        """Attendance records filtered on date/status text, then sorted."""

        sort = sort or SortSpec()
        rows = project(
            self._attendance.list_attendance(),
            ATTENDANCE_COLUMNS,
            filter_text,
            sort,
            searchable=_search_values,
        )
        return rows, render_table(rows, ATTENDANCE_COLUMNS, sort, row_id=lambda r: r.id)
