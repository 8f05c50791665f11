from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import httpx

from .config import JulesConfig
from .errors import JulesTransportError, JulesValidationError

logger = logging.getLogger("jules_client.transport")


@dataclass(slots=True, frozen=True)
class RequestDescriptor:
    """A single API call: method, resource path, query and JSON body."""

    method: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    json_body: Any | None = None

    def query(self) -> dict[str, Any]:
        return {key: value for key, value in self.params.items() if value is not None}


@dataclass(slots=True, frozen=True)
class RawResponse:
    status_code: int
    text: str
    reason: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


def _normalize_base_url(url: str) -> str:
    return url.rstrip("/")


def build_url(base_url: str, path: str) -> str:
    return f"{_normalize_base_url(base_url)}/{path.lstrip('/')}"


@dataclass(slots=True)
class HttpTransport:
    """Performs one HTTP round trip per call, with no retries.

    When ``client`` is set it is reused for every call; otherwise a client is
    opened and closed around each request.
    """

    config: JulesConfig
    client: httpx.AsyncClient | None = None

    @asynccontextmanager
    async def _client_context(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(timeout=self.config.timeout_s) as client:
            yield client

    def _base_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        auth = self.config.auth_headers()
        reserved = {name.lower() for name in auth}
        if self.config.headers:
            # The credential always wins over configured extras.
            headers.update(
                {name: value for name, value in self.config.headers.items() if name.lower() not in reserved}
            )
        headers.update(auth)
        return headers

    async def execute(self, request: RequestDescriptor) -> RawResponse:
        url = build_url(self.config.base_url, request.path)
        logger.debug("jules_request", extra={"method": request.method, "path": request.path})
        try:
            async with self._client_context() as client:
                response = await client.request(
                    request.method,
                    url,
                    params=request.query() or None,
                    json=request.json_body,
                    headers=self._base_headers(),
                )
        except httpx.InvalidURL as exc:
            raise JulesValidationError(f"Invalid request URL for {request.path!r}: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "jules_transport_error",
                extra={"method": request.method, "path": request.path, "error": type(exc).__name__},
            )
            raise JulesTransportError(f"{request.method} {request.path} failed: {exc}") from exc
        return RawResponse(
            status_code=response.status_code,
            text=response.text,
            reason=response.reason_phrase,
        )


__all__ = ["HttpTransport", "RawResponse", "RequestDescriptor", "build_url"]
