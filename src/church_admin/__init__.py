from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    SupersededFetchError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .lists import FELLOWSHIPS, MEMBERS, VOLUNTEER_OPPORTUNITIES, ListDefinition
from .models import ListPage
from .services import ListService, PermissionGate
from .state.async_state import (
    AsyncState,
    ErrorState,
    IdleState,
    LoadingState,
    PermissionErrorState,
    RemoteResult,
    SuccessState,
    UIStateType,
    resolve_state,
)
from .stores import FilterField, FilterStore, SortDirection, TableStore
from .ui.list_screen import ListScreen, build_list_screen
from .ui.notification_center import NotificationCenter
from .ui.ui_factory import create_success_state

__all__ = [
    "ApiError",
    "AsyncState",
    "AuthError",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "ErrorState",
    "FELLOWSHIPS",
    "FilterField",
    "FilterStore",
    "HttpClient",
    "IdleState",
    "ListDefinition",
    "ListPage",
    "ListScreen",
    "ListService",
    "LoadingState",
    "MEMBERS",
    "NotFoundError",
    "NotificationCenter",
    "PermissionDeniedError",
    "PermissionErrorState",
    "PermissionGate",
    "RateLimitError",
    "RemoteResult",
    "ServerError",
    "SortDirection",
    "SuccessState",
    "SupersededFetchError",
    "TableStore",
    "TransportError",
    "UIStateType",
    "VOLUNTEER_OPPORTUNITIES",
    "ValidationError",
    "build_list_screen",
    "create_success_state",
    "load_config",
    "resolve_state",
]
