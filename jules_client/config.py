from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

DEFAULT_BASE_URL = "https://jules.googleapis.com/v1alpha"
MAX_PAGE_SIZE = 100


class AuthScheme(str, Enum):
    """How the credential is attached to each request."""

    BEARER = "bearer"  # Authorization: Bearer <token>
    API_KEY = "api_key"  # X-Goog-Api-Key: <key>


@dataclass(slots=True, frozen=True)
class JulesConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    auth_scheme: AuthScheme = AuthScheme.BEARER
    timeout_s: float = 60.0
    stream_page_size: int = MAX_PAGE_SIZE
    headers: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must be non-empty")
        if not self.base_url:
            raise ValueError("base_url must be non-empty")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")
        if not 1 <= self.stream_page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"stream_page_size must be between 1 and {MAX_PAGE_SIZE}")
        # Accept plain strings so env/CLI values can be passed straight through.
        object.__setattr__(self, "auth_scheme", AuthScheme(self.auth_scheme))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> JulesConfig:
        env = os.environ if environ is None else environ
        api_key = env.get("JULES_API_KEY")
        if not api_key:
            raise ValueError("Jules API key required. Set the JULES_API_KEY environment variable.")
        timeout = env.get("JULES_TIMEOUT_S")
        return cls(
            api_key=api_key,
            base_url=env.get("JULES_BASE_URL") or DEFAULT_BASE_URL,
            auth_scheme=AuthScheme(env.get("JULES_AUTH_SCHEME") or AuthScheme.BEARER.value),
            timeout_s=float(timeout) if timeout else 60.0,
        )

    def auth_headers(self) -> dict[str, str]:
        if self.auth_scheme is AuthScheme.API_KEY:
            return {"X-Goog-Api-Key": self.api_key}
        return {"Authorization": f"Bearer {self.api_key}"}
