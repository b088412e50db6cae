from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass
class NotificationCenter:
    """Transient toasts shown around list fetches and mutations."""

    messages: list[dict[str, Any]] = field(default_factory=list)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), init=False, repr=False)

    def push(self, *, level: str, title: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
        payload = {
            "id": next(self._ids),
            "level": level,
            "title": title,
            "message": message,
            "details": details or {},
        }
        self.messages.append(payload)
        return payload

    def show_loading(self, message: str) -> int:
        return self.push(level="loading", title="Please wait", message=message)["id"]

    def success(self, message: str, *, title: str = "Success") -> dict[str, Any]:
        return self.push(level="success", title=title, message=message)

    def error(self, message: str, *, title: str = "Error", details: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.push(level="error", title=title, message=message, details=details)

    def dismiss(self, notification_id: int) -> None:
        self.messages[:] = [item for item in self.messages if item["id"] != notification_id]

    def active(self, level: str | None = None) -> list[dict[str, Any]]:
        return [item for item in self.messages if level is None or item["level"] == level]

    def clear(self) -> None:
        self.messages.clear()

    def render(self) -> dict[str, Any]:
        return {"count": len(self.messages), "messages": list(self.messages)}
