"""Public package surface for the Jules API client."""

from __future__ import annotations

from .client import JulesClient
from .config import AuthScheme, JulesConfig
from .errors import (
    ErrorKind,
    JulesAuthError,
    JulesDecodeError,
    JulesError,
    JulesNotFoundError,
    JulesServerError,
    JulesTransportError,
    JulesValidationError,
)
from .models import (
    Activity,
    AutomationMode,
    GitHubRepoContext,
    ListActivitiesResponse,
    ListSessionsResponse,
    ListSourcesResponse,
    Session,
    SessionState,
    Source,
    SourceContext,
)
from .pagination import PageStream, StreamState

__all__ = [
    "__version__",
    "JulesClient",
    "JulesConfig",
    "AuthScheme",
    "ErrorKind",
    "JulesError",
    "JulesTransportError",
    "JulesAuthError",
    "JulesNotFoundError",
    "JulesValidationError",
    "JulesServerError",
    "JulesDecodeError",
    "Activity",
    "AutomationMode",
    "GitHubRepoContext",
    "ListActivitiesResponse",
    "ListSessionsResponse",
    "ListSourcesResponse",
    "Session",
    "SessionState",
    "Source",
    "SourceContext",
    "PageStream",
    "StreamState",
]

__version__ = "0.1.0"
