"""Classified failures surfaced by the Jules client.

Every failed call raises exactly one subclass of :class:`JulesError`. The
subclasses map to distinct remediation paths: fix the credential, check the
resource name, fix the request, retry later, or report an incompatible
response.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    SERVER = "server"
    DECODE = "decode"


class JulesError(Exception):
    """Abstract base of the failure taxonomy.

    Catch it to handle every client failure at once. It is never raised
    itself, and only the concrete subclasses define :attr:`kind`.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.reason = reason

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status {self.status_code})"


class JulesTransportError(JulesError):
    """The request never produced an HTTP response (connect, timeout, TLS)."""

    kind = ErrorKind.TRANSPORT


class JulesAuthError(JulesError):
    """The server rejected the credential (401/403)."""

    kind = ErrorKind.AUTH


class JulesNotFoundError(JulesError):
    kind = ErrorKind.NOT_FOUND


class JulesValidationError(JulesError):
    """The server rejected the request as malformed or not allowed in the current state."""

    kind = ErrorKind.VALIDATION


class JulesServerError(JulesError):
    kind = ErrorKind.SERVER


class JulesDecodeError(JulesError):
    """A response arrived but could not be turned into the expected shape."""

    kind = ErrorKind.DECODE


__all__ = [
    "ErrorKind",
    "JulesError",
    "JulesTransportError",
    "JulesAuthError",
    "JulesNotFoundError",
    "JulesValidationError",
    "JulesServerError",
    "JulesDecodeError",
]
