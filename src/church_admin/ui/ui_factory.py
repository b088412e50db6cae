from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Generic, Mapping, Sequence

from ..models import ListPage, RowT
from ..state.async_state import AsyncAction, SuccessState
from ..stores.filter_store import FilterSnapshot, FilterStore, SortDirection
from ..stores.table_store import TableStore

if TYPE_CHECKING:
    from ..services.list_service import ListService

RowRenderer = Callable[[Sequence[Any], TableStore[Any]], Any]


@dataclass(frozen=True)
class PaginationDescriptor:
    current: int
    page_size: int
    total: int
    on_change: Callable[[int], Awaitable[None]]

    @property
    def page_count(self) -> int:
        return -(-self.total // self.page_size)

    def render(self) -> dict[str, Any]:
        return {
            "current": self.current,
            "page_size": self.page_size,
            "total": self.total,
            "page_count": self.page_count,
        }


@dataclass(frozen=True)
class FilterHandle:
    snapshot: FilterSnapshot
    apply_filters: Callable[[Mapping[str, Any]], Awaitable[None]]
    clear_filters: AsyncAction
    set_sorting: Callable[[str, SortDirection | str], Awaitable[None]]
    set_filter: Callable[[str, Any], None]
    toggle_panel: Callable[[], None]

    @property
    def values(self) -> Mapping[str, Any]:
        return self.snapshot.values

    def render(self) -> dict[str, Any]:
        return self.snapshot.render()


@dataclass(frozen=True)
class TableActions(Generic[RowT]):
    refresh: AsyncAction
    toggle_select: Callable[[RowT], None]
    set_selected: Callable[[Sequence[RowT]], None]
    clear_selection: Callable[[], None]
    expand: Callable[[RowT], None]
    collapse_all: Callable[[], None]


@dataclass(frozen=True)
class ListViewModel(Generic[RowT]):
    """Success payload handed to the presentation layer for one list screen."""

    resource: str
    total: int
    filters: FilterHandle
    pagination: PaginationDescriptor
    actions: TableActions[RowT]
    render_rows: Callable[[], Any]

    def render(self) -> dict[str, Any]:
        return {
            "resource": self.resource,
            "total": self.total,
            "filters": self.filters.render(),
            "pagination": self.pagination.render(),
            "table": self.render_rows(),
        }


def default_row_renderer(rows: Sequence[RowT], table_store: TableStore[RowT]) -> dict[str, Any]:
    offset = (table_store.current_page - 1) * table_store.page_size
    visible = rows[offset : offset + table_store.page_size]
    return {
        "page": table_store.current_page,
        "count": len(visible),
        "rows": [
            {
                "index": offset + position + 1,
                "id": row.id,
                "selected": table_store.is_selected(row),
                "expanded": table_store.is_expanded(row),
                "row": row,
            }
            for position, row in enumerate(visible)
        ],
    }


def create_success_state(
    page: ListPage[RowT],
    *,
    table_store: TableStore[RowT],
    filter_store: FilterStore,
    service: "ListService[RowT]",
    row_renderer: RowRenderer = default_row_renderer,
) -> SuccessState[ListViewModel[RowT]]:
    """Bind the live stores and service into an immutable success state.

    Values such as ``total`` and the filter snapshot are captured now. Every
    callable closes over the store instances themselves, so handles issued by
    an earlier call keep acting on current state.
    """
    total = table_store.total_results if table_store.has_data else page.total
    view_model = ListViewModel(
        resource=service.resource,
        total=total,
        filters=FilterHandle(
            snapshot=filter_store.snapshot(),
            apply_filters=service.apply_filters,
            clear_filters=service.clear_filters,
            set_sorting=service.set_sorting,
            set_filter=filter_store.set_filter,
            toggle_panel=filter_store.toggle_panel,
        ),
        pagination=PaginationDescriptor(
            current=table_store.current_page,
            page_size=table_store.page_size,
            total=total,
            on_change=service.handle_pagination,
        ),
        actions=TableActions(
            refresh=service.refresh,
            toggle_select=table_store.toggle_select,
            set_selected=table_store.set_selected,
            clear_selection=table_store.clear_selection,
            expand=table_store.expand,
            collapse_all=table_store.collapse_all,
        ),
        render_rows=lambda: row_renderer(table_store.rows, table_store),
    )
    return SuccessState(data=view_model, refresh=service.refresh)
