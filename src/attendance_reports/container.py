from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from .core.constants import DEFAULT_PERCENT_PRECISION, DEFAULT_PRESENT_STATUS, DEFAULT_TREND_WEEKS
from .dashboards.service import DashboardService
from .records.api_repository import ApiRecordRepository
from .records.connection import ApiConfig, ApiConnection


@dataclass(frozen=True)
class Container:
    conn: ApiConnection
    records_repo: ApiRecordRepository
    dashboard_service: DashboardService


def build_container(
    *,
    api_config: dict,
    present_status: str = DEFAULT_PRESENT_STATUS,
    trend_weeks: int = DEFAULT_TREND_WEEKS,
    precision: int = DEFAULT_PERCENT_PRECISION,
    transport: Optional[httpx.BaseTransport] = None,
) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        token=api_config.get("token"),
        timeout=float(api_config.get("timeout", 10)),
    )
    conn = ApiConnection(config, transport=transport)

    records_repo = ApiRecordRepository(conn)
    dashboard_service = DashboardService(
        records_repo,
        records_repo,
        records_repo,
        records_repo,
        records_repo,
        present_status=present_status,
        trend_weeks=trend_weeks,
        precision=precision,
    )

    return Container(conn=conn, records_repo=records_repo, dashboard_service=dashboard_service)
