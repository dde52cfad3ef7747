"""Minimal async client for the freispace analytics API."""
from typing import Any, NamedTuple
import logging

import httpx

from core.config import Settings  # type: ignore
from core.errors import HttpStatusError  # type: ignore

logger = logging.getLogger(__name__)


class HttpResponse(NamedTuple):
    status_code: int
    data: Any


class FreispaceClient:
    """Issues single-attempt JSON requests against the resolved base URL.

    The endpoint is appended to `settings.base_url` as-is, so callers pass the
    leading slash and any query string themselves.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._transport = transport

    def build_headers(self, headers: dict[str, str] | None = None) -> dict[str, str]:
        merged = {"Content-Type": "application/json"}
        if self.settings.api_key:
            merged["x-api-key"] = self.settings.api_key
        if headers:
            merged.update(headers)
        return merged

    async def request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
        **options: Any,
    ) -> HttpResponse:
        url = f"{self.settings.base_url}{endpoint}"
        if data:
            options["json"] = data
        options.setdefault("timeout", self.settings.timeout)

        logger.debug(f"{method} {url}")
        async with httpx.AsyncClient(transport=self._transport) as client:
            resp = await client.request(method, url, headers=self.build_headers(headers), **options)

        if not resp.is_success:
            raise HttpStatusError(resp.status_code, resp.text)

        # a 2xx body that is not JSON is a failure for the caller
        return HttpResponse(resp.status_code, resp.json())

    async def get(self, endpoint: str, headers: dict[str, str] | None = None, **options: Any) -> HttpResponse:
        return await self.request("GET", endpoint, headers=headers, **options)

    async def post(self, endpoint: str, data: Any = None, headers: dict[str, str] | None = None, **options: Any) -> HttpResponse:
        return await self.request("POST", endpoint, data, headers, **options)

    async def put(self, endpoint: str, data: Any = None, headers: dict[str, str] | None = None, **options: Any) -> HttpResponse:
        return await self.request("PUT", endpoint, data, headers, **options)

    async def patch(self, endpoint: str, data: Any = None, headers: dict[str, str] | None = None, **options: Any) -> HttpResponse:
        return await self.request("PATCH", endpoint, data, headers, **options)

    async def delete(self, endpoint: str, data: Any = None, headers: dict[str, str] | None = None, **options: Any) -> HttpResponse:
        return await self.request("DELETE", endpoint, data, headers, **options)
