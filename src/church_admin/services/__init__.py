from .list_service import ListMessages, ListService, ListSource
from .permissions_service import PermissionGate

__all__ = ["ListMessages", "ListService", "ListSource", "PermissionGate"]
