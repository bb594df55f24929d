from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, List, Mapping, Optional, TypeVar

import httpx

from ..common.validators import require_positive
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import MalformedRecordError
from .api_base import api_client, get_json, unwrap_collection
from .connection import ApiConnection
from .factory import (
    assignment_from_payload,
    attendance_from_payload,
    course_from_payload,
    load_many,
    student_from_payload,
    teacher_from_payload,
    timetable_from_payload,
)
from .model import CourseRef, RecordList

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageParams = Callable[[int], Mapping[str, Any]]


class ApiRecordRepository:
    """Reads full collections from the REST backend.

    Implements AttendanceSource, CourseAssignmentSource, TimetableSource,
    CourseSource and PeopleSource. Paged endpoints are read until a short or
    last page. Malformed rows are skipped; each returned RecordList carries
    its own skip count.
    """

    def __init__(self, conn_factory: ApiConnection, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._conn_factory = conn_factory
        self._page_size = require_positive(int(page_size), "page_size")

    def _by_page(self, number: int) -> Mapping[str, Any]:
        return {"page": number, "size": self._page_size}

    def _by_offset(self, number: int) -> Mapping[str, Any]:
        return {"limit": self._page_size, "offset": number * self._page_size}

    def _fetch_pages(self, client: httpx.Client, path: str, page_params: PageParams) -> List[Mapping[str, Any]]:
        rows: List[Mapping[str, Any]] = []
        previous = None
        for number in itertools.count():
            body = get_json(client, path, params=page_params(number))
            page = unwrap_collection(body, path)
            if page == previous:
                # backend ignored the paging parameters and resent everything
                break
            rows.extend(page)
            if len(page) < self._page_size or (isinstance(body, Mapping) and body.get("last") is True):
                break
            previous = page
        return rows

    def _list(
        self,
        path: str,
        parse: Callable[[Mapping[str, Any]], T],
        page_params: Optional[PageParams] = None,
    ) -> RecordList:
        with api_client(self._conn_factory) as client:
            if page_params is None:
                payloads = unwrap_collection(get_json(client, path), path)
            else:
                payloads = self._fetch_pages(client, path, page_params)
        result = load_many(payloads, parse)
        if result.skipped:
            logger.info("%s: loaded %d rows, skipped %d", path, len(result.items), result.skipped)
        return RecordList(result.items, skipped=result.skipped)

    def list_attendance(self) -> RecordList:
        return self._list("/attendance", attendance_from_payload)

    def list_assignments(self) -> RecordList:
        return self._list("/courseassign", assignment_from_payload)

    def list_timetable(self) -> RecordList:
        return self._list("/timetable", timetable_from_payload, self._by_page)

    def list_courses(self) -> RecordList:
        return self._list("/course", course_from_payload)

    def list_teachers(self) -> RecordList:
        return self._list("/teacher", teacher_from_payload, self._by_page)

    def list_students(self) -> RecordList:
        return self._list("/student", student_from_payload, self._by_offset)

    def get_course(self, course_id: int) -> Optional[CourseRef]:
        path = f"/course/{int(course_id)}"
        with api_client(self._conn_factory) as client:
            body = get_json(client, path, allow_missing=True)
        if not isinstance(body, Mapping):
            return None
        try:
            return course_from_payload(body)
        except MalformedRecordError as e:
            logger.warning("Course %s payload unusable: %s", course_id, e)
            return None
