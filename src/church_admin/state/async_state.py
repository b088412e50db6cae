"""Closed set of UI states for a data-dependent screen region.

States are immutable. A new one is produced on every resolution from the
remote fetch result and, when available, the locally accumulated snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar, Generic, TypeVar, Union

from ..error_mapper import ErrorKind, classify_error, to_user_message
from ..exceptions import PermissionDeniedError

T = TypeVar("T")
S = TypeVar("S")

AsyncAction = Callable[[], Awaitable[Any]]


class UIStateType(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    PERMISSION_ERROR = "permission_error"
    SUCCESS = "success"


@dataclass(frozen=True)
class IdleState:
    type: ClassVar[UIStateType] = UIStateType.IDLE

    def render(self) -> dict[str, Any]:
        return {"type": self.type.value}


@dataclass(frozen=True)
class LoadingState:
    message: str = "Loading..."
    type: ClassVar[UIStateType] = UIStateType.LOADING

    def render(self) -> dict[str, Any]:
        return {"type": self.type.value, "message": self.message}


@dataclass(frozen=True)
class ErrorState:
    message: str
    retry: AsyncAction
    error: BaseException | None = None
    trace_id: str | None = None
    type: ClassVar[UIStateType] = UIStateType.ERROR

    def render(self) -> dict[str, Any]:
        return {"type": self.type.value, "message": self.message, "trace_id": self.trace_id, "can_retry": True}


@dataclass(frozen=True)
class PermissionErrorState:
    required_capability: str | None
    message: str = "You don't have permission to perform this action."
    type: ClassVar[UIStateType] = UIStateType.PERMISSION_ERROR

    def render(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "required_capability": self.required_capability,
        }


@dataclass(frozen=True)
class SuccessState(Generic[T]):
    data: T
    refresh: AsyncAction | None = None
    type: ClassVar[UIStateType] = UIStateType.SUCCESS

    def render(self) -> dict[str, Any]:
        render = getattr(self.data, "render", None)
        return {"type": self.type.value, "data": render() if callable(render) else self.data}


AsyncState = Union[IdleState, LoadingState, ErrorState, PermissionErrorState, SuccessState[T]]


@dataclass(frozen=True)
class RemoteResult(Generic[T]):
    """What the last remote fetch reported, plus a handle to run it again."""

    refetch: AsyncAction
    is_loading: bool = False
    error: BaseException | None = None
    data: T | None = None

    @property
    def is_success(self) -> bool:
        return not self.is_loading and self.error is None and self.data is not None

    def loading(self) -> "RemoteResult[T]":
        return RemoteResult(refetch=self.refetch, is_loading=True, data=self.data)

    def succeeded(self, data: T) -> "RemoteResult[T]":
        return RemoteResult(refetch=self.refetch, data=data)

    def failed(self, error: BaseException) -> "RemoteResult[T]":
        return RemoteResult(refetch=self.refetch, error=error)


@dataclass(frozen=True)
class LocalSnapshot(Generic[T]):
    resource: str
    has_data: bool
    data: T


def resolve_state(
    remote: RemoteResult[T],
    *,
    resource: str,
    on_success: Callable[[T], SuccessState[S]],
    local: LocalSnapshot[T] | None = None,
    capability: str | None = None,
    loading_message: str | None = None,
) -> AsyncState:
    usable_local = local is not None and local.has_data and local.resource == resource

    if remote.is_loading:
        if usable_local:
            return on_success(local.data)
        return LoadingState(message=loading_message or f"Loading {resource}...")

    if remote.error is not None:
        error = remote.error
        if classify_error(error) is ErrorKind.PERMISSION_DENIED:
            denied = error if isinstance(error, PermissionDeniedError) else None
            return PermissionErrorState(
                required_capability=(denied.capability if denied else None) or capability,
                message=to_user_message(error, resource),
            )
        return ErrorState(
            message=to_user_message(error, resource),
            retry=remote.refetch,
            error=error,
            trace_id=getattr(error, "trace_id", None),
        )

    if remote.is_success:
        return on_success(remote.data)

    return IdleState()
