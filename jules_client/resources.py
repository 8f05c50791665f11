"""Resource operations for sessions, activities and sources.

Each method builds a :class:`RequestDescriptor`, runs it through the transport
and decodes the result. Resource names such as ``sessions/123`` are treated as
opaque path segments.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from .config import JulesConfig
from .decoding import decode_empty, decode_model
from .models import (
    Activity,
    ApprovePlanRequest,
    ListActivitiesResponse,
    ListSessionsResponse,
    ListSourcesResponse,
    SendMessageRequest,
    Session,
    Source,
)
from .pagination import PageStream
from .transport import HttpTransport, RequestDescriptor

ModelT = TypeVar("ModelT", bound=BaseModel)


def _require_name(name: str, *, label: str = "name") -> str:
    if not name or not name.strip():
        raise ValueError(f"{label} must be a non-empty resource name")
    return name


def _page_params(page_size: int | None, page_token: str | None) -> dict[str, Any]:
    return {"pageSize": page_size, "pageToken": page_token or None}


class _Resource:
    def __init__(self, transport: HttpTransport, config: JulesConfig) -> None:
        self._transport = transport
        self._config = config

    async def _fetch(self, request: RequestDescriptor, model: type[ModelT]) -> ModelT:
        response = await self._transport.execute(request)
        return decode_model(response, model)

    async def _acknowledge(self, request: RequestDescriptor) -> None:
        response = await self._transport.execute(request)
        decode_empty(response)

    def _stream_page_size(self, page_size: int | None) -> int:
        return page_size if page_size is not None else self._config.stream_page_size


class SessionsResource(_Resource):
    async def create(self, session: Session) -> Session:
        """Create a session; the returned value carries the server-assigned fields."""
        request = RequestDescriptor("POST", "sessions", json_body=session.to_request_body())
        return await self._fetch(request, Session)

    async def get(self, name: str) -> Session:
        return await self._fetch(RequestDescriptor("GET", _require_name(name)), Session)

    async def list(self, page_size: int | None = None, page_token: str | None = None) -> ListSessionsResponse:
        request = RequestDescriptor("GET", "sessions", params=_page_params(page_size, page_token))
        return await self._fetch(request, ListSessionsResponse)

    async def delete(self, name: str) -> None:
        await self._acknowledge(RequestDescriptor("DELETE", _require_name(name)))

    def stream(self, page_size: int | None = None) -> PageStream[Session]:
        """Iterate over every session, fetching pages as the consumer advances."""
        size = self._stream_page_size(page_size)

        async def fetch_page(token: str | None) -> ListSessionsResponse:
            return await self.list(page_size=size, page_token=token)

        return PageStream(fetch_page)

    async def send_message(self, name: str, prompt: str) -> None:
        """Send a user message to a session.

        The server decides whether the session is in a state that accepts
        messages; a refusal surfaces as :class:`JulesValidationError`.
        """
        path = f"{_require_name(name)}:sendMessage"
        body = SendMessageRequest(prompt=prompt).model_dump(by_alias=True)
        await self._acknowledge(RequestDescriptor("POST", path, json_body=body))

    async def approve_plan(self, name: str) -> None:
        path = f"{_require_name(name)}:approvePlan"
        body = ApprovePlanRequest().model_dump(by_alias=True)
        await self._acknowledge(RequestDescriptor("POST", path, json_body=body))


class ActivitiesResource(_Resource):
    async def get(self, name: str) -> Activity:
        return await self._fetch(RequestDescriptor("GET", _require_name(name)), Activity)

    async def list(
        self,
        session_name: str,
        page_size: int | None = None,
        page_token: str | None = None,
    ) -> ListActivitiesResponse:
        path = f"{_require_name(session_name, label='session_name')}/activities"
        request = RequestDescriptor("GET", path, params=_page_params(page_size, page_token))
        return await self._fetch(request, ListActivitiesResponse)

    def stream(self, session_name: str, page_size: int | None = None) -> PageStream[Activity]:
        _require_name(session_name, label="session_name")
        size = self._stream_page_size(page_size)

        async def fetch_page(token: str | None) -> ListActivitiesResponse:
            return await self.list(session_name, page_size=size, page_token=token)

        return PageStream(fetch_page)


class SourcesResource(_Resource):
    async def get(self, name: str) -> Source:
        return await self._fetch(RequestDescriptor("GET", _require_name(name)), Source)

    async def list(
        self,
        filter: str | None = None,
        page_size: int | None = None,
        page_token: str | None = None,
    ) -> ListSourcesResponse:
        params = {"filter": filter or None, **_page_params(page_size, page_token)}
        request = RequestDescriptor("GET", "sources", params=params)
        return await self._fetch(request, ListSourcesResponse)

    def stream(self, filter: str | None = None, page_size: int | None = None) -> PageStream[Source]:
        size = self._stream_page_size(page_size)

        async def fetch_page(token: str | None) -> ListSourcesResponse:
            return await self.list(filter=filter, page_size=size, page_token=token)

        return PageStream(fetch_page)


__all__ = ["ActivitiesResource", "SessionsResource", "SourcesResource"]
