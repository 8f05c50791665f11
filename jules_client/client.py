from __future__ import annotations

from types import TracebackType

import httpx

from .config import JulesConfig
from .resources import ActivitiesResource, SessionsResource, SourcesResource
from .transport import HttpTransport


class JulesClient:
    """Entry point for the Jules API.

    Operations are grouped by resource::

        async with JulesClient("API_KEY") as client:
            async for session in client.sessions.stream():
                print(session.name, session.state)

    Used outside ``async with``, each call opens its own HTTP connection unless
    an ``httpx.AsyncClient`` is supplied.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: JulesConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if config is None:
            config = JulesConfig(api_key=api_key) if api_key else JulesConfig.from_env()
        self.config = config
        self._owns_client = False
        self._transport = HttpTransport(config=config, client=http_client)
        self.sessions = SessionsResource(self._transport, config)
        self.activities = ActivitiesResource(self._transport, config)
        self.sources = SourcesResource(self._transport, config)

    async def __aenter__(self) -> JulesClient:
        if self._transport.client is None:
            self._transport.client = httpx.AsyncClient(timeout=self.config.timeout_s)
            self._owns_client = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._transport.client is not None:
            await self._transport.client.aclose()
            self._transport.client = None
            self._owns_client = False


__all__ = ["JulesClient"]
