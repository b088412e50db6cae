from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = BASE_DIR / "src"

sys.path.insert(0, str(SRC_DIR))

from church_admin.models import ListPage  # noqa: E402
from church_admin.services.list_service import ListService  # noqa: E402
from church_admin.services.permissions_service import PermissionGate  # noqa: E402
from church_admin.stores.filter_store import FilterField, FilterStore  # noqa: E402
from church_admin.stores.table_store import TableStore  # noqa: E402
from church_admin.ui.notification_center import NotificationCenter  # noqa: E402


@dataclass(frozen=True)
class Row:
    id: str
    name: str


class FakeSource:
    """In-memory remote collaborator that records every list call."""

    def __init__(self, rows: Sequence[Row]) -> None:
        self.rows = list(rows)
        self.calls: list[dict[str, Any]] = []
        self.deleted: list[Any] = []
        self.fail_with: Exception | None = None
        self.hold = False
        self.pending: list[asyncio.Event] = []

    async def list(self, params: Mapping[str, Any]) -> ListPage[Row]:
        self.calls.append(dict(params))
        if self.hold:
            release = asyncio.Event()
            self.pending.append(release)
            await release.wait()
        if self.fail_with is not None:
            raise self.fail_with
        start = params["range_start"]
        end = params["range_end"]
        return ListPage(rows=self.rows[start : end + 1], total=len(self.rows))

    async def delete(self, row_id: Any) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.deleted.append(row_id)
        self.rows = [row for row in self.rows if row.id != row_id]


@pytest.fixture
def make_rows() -> Callable[[int], list[Row]]:
    def _make(count: int) -> list[Row]:
        return [Row(id=f"row-{index}", name=f"Row {index}") for index in range(count)]

    return _make


@pytest.fixture
def fake_source() -> Callable[[Sequence[Row]], FakeSource]:
    return FakeSource


@pytest.fixture
def build_service() -> Callable[..., ListService[Row]]:
    def _build(
        source: FakeSource,
        *,
        page_size: int = 10,
        gate: PermissionGate | None = None,
        capability: str | None = None,
        eager: str | None = None,
        notifications: NotificationCenter | None = None,
    ) -> ListService[Row]:
        return ListService(
            resource="members",
            source=source,
            table_store=TableStore("members", page_size),
            filter_store=FilterStore(
                [FilterField("name"), FilterField("fellowship_id"), FilterField("is_baptized")],
                default_sort="name",
            ),
            notifications=notifications or NotificationCenter(),
            gate=gate,
            capability=capability,
            eager=eager,
        )

    return _build
