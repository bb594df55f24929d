from __future__ import annotations

from datetime import date

import httpx
import pytest

from attendance_reports.core.exceptions import DataSourceError, ValidationError
from attendance_reports.records.api_repository import ApiRecordRepository
from attendance_reports.records.connection import ApiConfig, ApiConnection


def _repo(handler, **kwargs) -> ApiRecordRepository:
    conn = ApiConnection(ApiConfig(base_url="http://backend/api/", token="secret"), transport=httpx.MockTransport(handler))
    return ApiRecordRepository(conn, **kwargs)


def test_list_attendance_sends_token_and_parses_rows():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json=[
                {"id": 1, "userId": 5, "courseId": 3, "date": "2025-04-02", "status": "Present"},
                {"id": None},
            ],
        )

    records = _repo(handler).list_attendance()

    assert seen == {"path": "/api/attendance", "auth": "secret"}
    assert len(records) == 1
    assert records[0].date == date(2025, 4, 2)
    assert records.skipped == 1


def test_timetable_accepts_page_envelope():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["size"] == "100"
        return httpx.Response(
            200,
            json={
                "content": [
                    {"id": 1, "date": "2025-04-02", "startTime": "09:00", "endTime": "10:00", "teacherId": 7, "courseId": 1, "classroom": "A1"}
                ]
            },
        )

    entries = _repo(handler).list_timetable()

    assert [e.id for e in entries] == [1]


def test_get_course_missing_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/course/1"):
            return httpx.Response(200, json={"id": 1, "name": "Calculus I", "code": "MATH101"})
        return httpx.Response(404)

    repo = _repo(handler)

    assert repo.get_course(1).name == "Calculus I"
    assert repo.get_course(2) is None


def test_server_error_raises_data_source_error():
    repo = _repo(lambda request: httpx.Response(500))

    with pytest.raises(DataSourceError):
        repo.list_assignments()


def test_transport_error_raises_data_source_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(DataSourceError):
        _repo(handler).list_courses()


def test_non_collection_body_raises_data_source_error():
    with pytest.raises(DataSourceError):
        _repo(lambda request: httpx.Response(200, json={"error": "nope"})).list_students()


def _timetable_row(i: int) -> dict:
    return {"id": i, "date": "2025-04-02", "startTime": "09:00", "endTime": "10:00", "teacherId": 7, "courseId": 1}


def test_paged_collections_are_read_to_the_end():
    students = [{"id": i, "userId": 1000 + i, "firstName": f"S{i}"} for i in range(150)]
    teachers = [{"id": i, "userId": i, "name": f"T{i}"} for i in range(100)]
    timetable = [_timetable_row(i) for i in range(150)]
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        params = request.url.params
        calls.append((request.url.path, dict(params)))
        if request.url.path.endswith("/student"):
            offset, limit = int(params["offset"]), int(params["limit"])
            return httpx.Response(200, json=students[offset : offset + limit])
        page, size = int(params["page"]), int(params["size"])
        rows = timetable if request.url.path.endswith("/timetable") else teachers
        return httpx.Response(200, json={"content": rows[page * size : (page + 1) * size]})

    repo = _repo(handler, page_size=100)

    assert len(repo.list_students()) == 150
    assert [e.id for e in repo.list_timetable()] == list(range(150))
    assert len(repo.list_teachers()) == 100
    assert [p for path, p in calls if path.endswith("/student")] == [
        {"limit": "100", "offset": "0"},
        {"limit": "100", "offset": "100"},
    ]
    # a full last page needs one more request to see the empty page
    assert sum(1 for path, _ in calls if path.endswith("/teacher")) == 2


def test_last_flag_in_page_envelope_stops_paging():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.params["page"])
        return httpx.Response(200, json={"content": [_timetable_row(1), _timetable_row(2)], "last": True})

    entries = _repo(handler, page_size=2).list_timetable()

    assert [e.id for e in entries] == [1, 2]
    assert calls == ["0"]


def test_backend_ignoring_paging_is_read_once():
    rows = [_timetable_row(i) for i in range(3)]

    entries = _repo(lambda request: httpx.Response(200, json=rows), page_size=2).list_timetable()

    assert [e.id for e in entries] == [0, 1, 2]


def test_skip_counts_are_per_call():
    pages = iter([[{"id": 1}, {"id": None}], [{"id": 2}]])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=next(pages))

    repo = _repo(handler)

    assert repo.list_attendance().skipped == 1
    assert repo.list_attendance().skipped == 0


def test_page_size_must_be_positive():
    with pytest.raises(ValidationError):
        _repo(lambda request: httpx.Response(200, json=[]), page_size=0)
