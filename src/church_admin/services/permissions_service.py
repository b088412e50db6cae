from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..exceptions import PermissionDeniedError
from ..models import PermissionEntry


class PermissionGate:
    """Default deny gate over action keys such as ``member.findAll``.

    A key denied by any entry stays denied even if a later entry allows it.
    """

    def __init__(self, entries: Iterable[PermissionEntry | Mapping[str, object]]) -> None:
        self._decisions = self._normalize(entries)

    @classmethod
    def from_allowed_actions(cls, actions: Iterable[str]) -> "PermissionGate":
        return cls([PermissionEntry(key=action) for action in actions])

    @staticmethod
    def _normalize(entries: Iterable[PermissionEntry | Mapping[str, object]]) -> dict[str, bool]:
        decisions: dict[str, bool] = {}
        for raw_entry in entries:
            entry = PermissionEntry.model_validate(raw_entry)
            key = entry.key.strip()
            if decisions.get(key) is False:
                continue
            decisions[key] = entry.allowed
        return decisions

    def is_allowed(self, action: str) -> bool:
        return self._decisions.get(action, False)

    def allows_any(self, *actions: str) -> bool:
        return any(self.is_allowed(action) for action in actions)

    def can_access_resource(self, resource: str) -> bool:
        return bool(self.resource_actions(resource))

    def resource_actions(self, resource: str) -> set[str]:
        prefix = f"{resource}."
        return {key for key in self.allowed_keys() if key.startswith(prefix)}

    def allowed_keys(self) -> set[str]:
        return {key for key, allowed in self._decisions.items() if allowed}

    def require(self, action: str) -> None:
        if self.is_allowed(action):
            return
        raise PermissionDeniedError.for_capability(action)
