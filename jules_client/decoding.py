"""Turn raw HTTP responses into typed values or classified errors.

These functions only look at the status code and body text; they perform no
I/O and return the same result for the same input.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from .errors import (
    JulesAuthError,
    JulesDecodeError,
    JulesError,
    JulesNotFoundError,
    JulesServerError,
    JulesValidationError,
)
from .transport import RawResponse

logger = logging.getLogger("jules_client.decoding")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_details(body: str) -> tuple[str | None, str | None]:
    """Extract ``(message, reason)`` from an error body, if it is JSON."""
    if not body.strip():
        return None, None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return body.strip(), None
    if not isinstance(payload, Mapping):
        return body.strip(), None
    error = payload.get("error")
    if isinstance(error, Mapping):
        message = error.get("message")
        reason = error.get("status")
        return (str(message) if message else None), (str(reason) if reason else None)
    if isinstance(error, str) and error:
        return error, None
    detail = payload.get("detail") or payload.get("message") or payload.get("title")
    return (str(detail) if detail else None), None


def classify_error(response: RawResponse) -> JulesError:
    """Map a non-2xx response onto the error taxonomy."""
    status = response.status_code
    message, reason = _error_details(response.text)
    text = message or response.reason or f"HTTP {status}"

    error_cls: type[JulesError]
    if status in (401, 403):
        error_cls = JulesAuthError
    elif status == 404:
        error_cls = JulesNotFoundError
    elif 400 <= status < 500:
        error_cls = JulesValidationError
    elif 500 <= status < 600:
        error_cls = JulesServerError
    else:
        error_cls = JulesDecodeError
        text = f"Unexpected HTTP status {status}"

    logger.debug("jules_api_error", extra={"status": status, "kind": error_cls.kind.value})
    return error_cls(text, status_code=status, body=response.text, reason=reason)


def decode_model(response: RawResponse, model: type[ModelT]) -> ModelT:
    """Decode a response body into ``model`` or raise the classified error."""
    if not response.is_success:
        raise classify_error(response)
    if not response.text.strip():
        raise JulesDecodeError(
            f"Expected a {model.__name__} body but the response was empty",
            status_code=response.status_code,
            body=response.text,
        )
    try:
        return model.model_validate_json(response.text)
    except ValidationError as exc:
        raise JulesDecodeError(
            f"Response did not match {model.__name__}: {exc}",
            status_code=response.status_code,
            body=response.text,
        ) from exc


def decode_empty(response: RawResponse) -> None:
    """Accept an acknowledgement body: blank or any JSON document."""
    if not response.is_success:
        raise classify_error(response)
    if not response.text.strip():
        return None
    try:
        json.loads(response.text)
    except json.JSONDecodeError as exc:
        raise JulesDecodeError(
            f"Acknowledgement body is not valid JSON: {exc}",
            status_code=response.status_code,
            body=response.text,
        ) from exc
    return None


__all__ = ["classify_error", "decode_empty", "decode_model"]
