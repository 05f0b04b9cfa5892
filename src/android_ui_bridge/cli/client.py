"""HTTP client for the bridge API used by CLI commands."""

from __future__ import annotations

import json
from typing import Any

import httpx

DEFAULT_URL = "http://127.0.0.1:7333"


class BridgeClient:
    """Thin httpx wrapper; parameters are sent as query strings."""

    def __init__(self, base_url: str = DEFAULT_URL, *, timeout: float = 15.0) -> None:
        self.base_url = base_url
        self._client = httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def request(
        self, method: str, path: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        return self._client.request(method, path, params=params)


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=True)
