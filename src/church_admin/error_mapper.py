from __future__ import annotations

from enum import Enum
from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)


class ErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    FETCH_FAILURE = "fetch_failure"


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or "HTTP_ERROR")
    message = str(payload.get("message") or "Request failed")
    details = payload.get("details")
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    common = {
        "code": code,
        "message": message,
        "details": details,
        "trace_id": resolved_trace_id,
        "status_code": status_code,
        "raw_payload": dict(payload),
    }
    if status_code == 403:
        return PermissionDeniedError(**common, capability=_capability_from_details(details))
    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(**common)


def classify_error(error: BaseException) -> ErrorKind:
    if isinstance(error, PermissionDeniedError):
        return ErrorKind.PERMISSION_DENIED
    if isinstance(error, NotFoundError):
        return ErrorKind.NOT_FOUND
    return ErrorKind.FETCH_FAILURE


def to_user_message(error: BaseException, entity: str | None = None) -> str:
    """Message for error states and notifications, prefixed by what failed to load."""
    subject = f" {entity}" if entity else ""
    base = f"Failed to load{subject}"
    if isinstance(error, TransportError):
        return "Unable to connect to the server. Please check your internet connection."
    if isinstance(error, PermissionDeniedError):
        return error.message or "Permission denied"
    if isinstance(error, NotFoundError):
        return f"{(entity or 'resource').capitalize()} not found"
    if isinstance(error, ApiError):
        if error.message and error.message != "Request failed":
            return f"{base}: {error.message}"
        return base
    text = str(error)
    return f"{base}: {text}" if text else base


def _capability_from_details(details: object) -> str | None:
    if not isinstance(details, Mapping):
        return None
    for key in ("required_permission", "capability"):
        value = details.get(key)
        if isinstance(value, str) and value:
            return value
    return None
