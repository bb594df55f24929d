from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS


@dataclass
class ApiConfig:
    base_url: str
    token: Optional[str] = None
    timeout: float = DEFAULT_API_TIMEOUT_SECONDS


class ApiConnection:
    """httpx client factory for the school REST backend.

    Note: The token is passed in explicitly; nothing here reads session storage.
    """

    def __init__(self, config: ApiConfig, *, transport: Optional[httpx.BaseTransport] = None):
        self._config = config
        self._transport = transport

    @property
    def config(self) -> ApiConfig:
        return self._config

    def connect(self) -> httpx.Client:
        headers = {"Content-Type": "application/json"}
        if self._config.token:
            headers["Authorization"] = self._config.token
        return httpx.Client(
            base_url=self._config.base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(self._config.timeout),
            transport=self._transport,
        )
