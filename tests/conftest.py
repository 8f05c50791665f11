import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

# Ensure repository root is on sys.path for test imports.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from jules_client import AuthScheme, JulesClient, JulesConfig  # noqa: E402

BASE_URL = "https://jules.test/v1alpha"

Handler = Callable[[httpx.Request], httpx.Response]


class MockServer:
    """Routes requests to a handler and records every request it sees."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1) -> Any:
        content = self.requests[index].content
        return json.loads(content) if content else None


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def session_payload(session_id: str, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": f"sessions/{session_id}",
        "id": session_id,
        "prompt": f"Task {session_id}",
        "sourceContext": {
            "source": "sources/github/acme/web",
            "githubRepoContext": {"startingBranch": "main"},
        },
        "state": "IN_PROGRESS",
        "createTime": "2025-05-01T10:00:00Z",
        "updateTime": "2025-05-01T10:05:00Z",
    }
    payload.update(extra)
    return payload


def activity_payload(session_id: str, activity_id: str, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": f"sessions/{session_id}/activities/{activity_id}",
        "id": activity_id,
        "createTime": "2025-05-01T10:01:00Z",
        "originator": "agent",
        "progressUpdated": {"title": "Reading code", "description": "Scanning handlers"},
    }
    payload.update(extra)
    return payload


def source_payload(source_id: str) -> dict[str, Any]:
    return {
        "name": f"sources/{source_id}",
        "id": source_id,
        "githubRepo": {
            "owner": "acme",
            "repo": "web",
            "isPrivate": True,
            "defaultBranch": {"displayName": "main"},
            "branches": [{"displayName": "main"}, {"displayName": "dev"}],
        },
    }


@pytest.fixture
def make_client() -> Callable[..., tuple[JulesClient, MockServer]]:
    def _make(
        handler: Handler,
        *,
        auth_scheme: AuthScheme = AuthScheme.BEARER,
        stream_page_size: int = 100,
    ) -> tuple[JulesClient, MockServer]:
        server = MockServer(handler)
        config = JulesConfig(
            api_key="test-key",
            base_url=BASE_URL,
            auth_scheme=auth_scheme,
            stream_page_size=stream_page_size,
        )
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(server))
        return JulesClient(config=config, http_client=http_client), server

    return _make
