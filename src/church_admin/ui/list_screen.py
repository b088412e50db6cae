from __future__ import annotations

from typing import Any, Generic, Hashable, Mapping, Protocol

from ..exceptions import ApiError, SupersededFetchError
from ..http_client import HttpClient
from ..lists import ListDefinition
from ..models import ListPage, RowT
from ..services.list_service import ListService
from ..services.permissions_service import PermissionGate
from ..state.async_state import AsyncState, RemoteResult, SuccessState, resolve_state
from ..stores.filter_store import FilterStore
from ..stores.table_store import TableStore
from .notification_center import NotificationCenter
from .ui_factory import ListViewModel, RowRenderer, create_success_state, default_row_renderer


class ListScreenSource(Protocol):
    async def list(self, params: Mapping[str, Any]) -> ListPage: ...

    async def delete(self, row_id: Any) -> None: ...


class ListScreen(Generic[RowT]):
    """One mounted list screen: owns its stores and resolves what to show."""

    def __init__(
        self,
        definition: ListDefinition,
        service: ListService[RowT],
        source: ListScreenSource,
        row_renderer: RowRenderer = default_row_renderer,
    ) -> None:
        self.definition = definition
        self.service = service
        self.source = source
        self.row_renderer = row_renderer
        self.remote: RemoteResult[ListPage[RowT]] = RemoteResult(refetch=self.load)

    @classmethod
    def build(
        cls,
        definition: ListDefinition,
        source: ListScreenSource,
        *,
        page_size: int,
        gate: PermissionGate | None = None,
        notifications: NotificationCenter | None = None,
        row_renderer: RowRenderer = default_row_renderer,
    ) -> "ListScreen[Any]":
        service: ListService[Any] = ListService(
            resource=definition.resource,
            source=source,
            table_store=definition.create_table_store(page_size),
            filter_store=definition.create_filter_store(),
            notifications=notifications,
            gate=gate,
            capability=definition.capability,
            eager=definition.eager,
            messages=definition.messages(),
        )
        return cls(definition, service, source, row_renderer)

    @property
    def table_store(self) -> TableStore[RowT]:
        return self.service.table_store

    @property
    def filter_store(self) -> FilterStore:
        return self.service.filter_store

    @property
    def notifications(self) -> NotificationCenter:
        return self.service.notifications

    async def load(self) -> AsyncState:
        self.remote = self.remote.loading()
        try:
            page = await self.service.fetch_initial()
        except SupersededFetchError:
            # a newer fetch owns the store; show its rows or drop back to idle
            snapshot = self.table_store.snapshot()
            if snapshot.has_data:
                self.remote = self.remote.succeeded(snapshot.data)
            else:
                self.remote = RemoteResult(refetch=self.load)
        except ApiError as exc:
            self.remote = self.remote.failed(exc)
        else:
            self.remote = self.remote.succeeded(page)
        return self.resolve()

    def resolve(self) -> AsyncState:
        return resolve_state(
            self.remote,
            resource=self.definition.resource,
            on_success=self._success_state,
            local=self.table_store.snapshot(),
            capability=self.definition.capability,
        )

    async def delete_row(self, row: RowT) -> None:
        entity = self.definition.entity
        row_id: Hashable = row.id

        async def _delete() -> None:
            if self.service.gate is not None and self.definition.delete_capability:
                self.service.gate.require(self.definition.delete_capability)
            await self.source.delete(row_id)

        await self.service.run_mutation(
            _delete,
            pending=f"Deleting {entity}...",
            success=f"{self.definition.label} deleted successfully",
            failure=f"Failed to delete {entity}",
        )

    def close(self) -> None:
        self.table_store.reset()
        self.remote = RemoteResult(refetch=self.load)

    def _success_state(self, page: ListPage[RowT]) -> SuccessState[ListViewModel[RowT]]:
        return create_success_state(
            page,
            table_store=self.table_store,
            filter_store=self.filter_store,
            service=self.service,
            row_renderer=self.row_renderer,
        )


def build_list_screen(
    definition: ListDefinition,
    http: HttpClient,
    *,
    access_token: str | None = None,
    gate: PermissionGate | None = None,
    notifications: NotificationCenter | None = None,
) -> ListScreen[Any]:
    client = definition.client_class(http=http, access_token=access_token)
    return ListScreen.build(
        definition,
        client,
        page_size=http.config.default_page_size,
        gate=gate,
        notifications=notifications,
    )
