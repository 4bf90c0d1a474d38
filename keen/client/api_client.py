"""
HTTP client for the series endpoint.

No retries: a failed request surfaces as ``ClientError`` and the next user
selection triggers the next attempt.
"""

from __future__ import annotations

import os
from typing import Optional

import httpx

from keen.core.config import Config
from keen.core.series import Series, series_from_payload
from keen.utils.logger import get_logger

log = get_logger(__name__)

DEFAULT_ERROR = "Failed to load data"


class ClientError(Exception):
    """Raised when the series endpoint cannot deliver a series."""

    def __init__(self, message: str = DEFAULT_ERROR, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def default_base_url() -> str:
    return os.getenv("KEEN_API_URL") or Config.get("client", "api_url", default="http://localhost:5000")


class SeriesApiClient:
    """Async wrapper around ``GET /api/data``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or default_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else float(Config.get("client", "timeout_seconds", default=10))
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport)

    async def __aenter__(self) -> "SeriesApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_series(self, company: str, metric: str) -> Series:
        try:
            response = await self._client.get("/api/data", params={"company": company, "metric": metric})
        except httpx.HTTPError as exc:
            log.warning(f"Request for {company}/{metric} failed: {exc}")
            raise ClientError() from exc

        if response.status_code != 200:
            raise ClientError(_error_message(response), status_code=response.status_code)

        try:
            return series_from_payload(response.json())
        except (ValueError, KeyError, TypeError) as exc:
            log.warning(f"Malformed series payload for {company}/{metric}: {exc}")
            raise ClientError() from exc


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return DEFAULT_ERROR


__all__ = ["SeriesApiClient", "ClientError", "default_base_url"]
