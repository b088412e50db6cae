from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class AuthError(ApiError):
    """Authentication failed or session is invalid."""


@dataclass
class PermissionDeniedError(ApiError):
    """Authorization denied for a capability such as ``member.findAll``."""

    capability: str | None = None

    @classmethod
    def for_capability(cls, capability: str, message: str | None = None) -> "PermissionDeniedError":
        return cls(
            code="PERMISSION_DENIED",
            message=message or f"Missing required permissions: {capability}",
            details={"required_permission": capability},
            trace_id=None,
            status_code=403,
            capability=capability,
        )


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class SupersededFetchError(RuntimeError):
    """A list fetch finished after a newer query generation replaced it."""

    def __init__(self, resource: str, started_generation: int, current_generation: int) -> None:
        super().__init__(
            f"{resource} fetch from generation {started_generation} superseded by {current_generation}"
        )
        self.resource = resource
        self.started_generation = started_generation
        self.current_generation = current_generation
