from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional

import httpx

from ..core.exceptions import DataSourceError
from .connection import ApiConnection


@contextmanager
def api_client(conn_factory: ApiConnection) -> Iterator[httpx.Client]:
    client = conn_factory.connect()
    try:
        yield client
    finally:
        client.close()


def get_json(client: httpx.Client, path: str, *, params: Optional[Mapping[str, Any]] = None, allow_missing: bool = False) -> Any:
    """GET ``path`` and decode JSON.

    Transport and HTTP status failures become DataSourceError. With
    ``allow_missing`` a 404 returns None instead.
    """

    try:
        resp = client.get(path, params=params)
    except httpx.HTTPError as e:
        raise DataSourceError(f"Request to {path} failed: {e}") from e

    if allow_missing and resp.status_code == 404:
        return None

    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise DataSourceError(f"{path} returned HTTP {resp.status_code}") from e

    try:
        return resp.json()
    except ValueError as e:
        raise DataSourceError(f"{path} returned invalid JSON") from e


def unwrap_collection(body: Any, path: str) -> List[Mapping[str, Any]]:
    """Accept a bare list or a ``{"content": [...]}`` page envelope."""

    if isinstance(body, Mapping) and "content" in body:
        body = body["content"]
    if not isinstance(body, list):
        raise DataSourceError(f"{path} did not return a collection")
    return [row for row in body if isinstance(row, Mapping)]
