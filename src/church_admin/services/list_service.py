"""Fetch orchestration for one paginated list screen.

The service decides when the remote collaborator is called and feeds the
results into the table store. Rows for a page are fetched once; paging back
or into an already accumulated window only moves the page pointer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Mapping, Protocol, TypeVar

from ..error_mapper import to_user_message
from ..exceptions import ApiError, PermissionDeniedError, SupersededFetchError
from ..models import ListPage, RowT
from ..observability import get_logger, log_action
from ..stores.filter_store import FilterStore, SortDirection
from ..stores.table_store import TableStore
from ..ui.notification_center import NotificationCenter
from .permissions_service import PermissionGate

logger = get_logger(__name__)

T = TypeVar("T")


class ListSource(Protocol):
    async def list(self, params: Mapping[str, Any]) -> ListPage: ...


@dataclass(frozen=True)
class ListMessages:
    refreshing: str
    loading_more: str
    refresh_failed: str
    pagination_failed: str

    @classmethod
    def for_entity(cls, plural: str) -> "ListMessages":
        return cls(
            refreshing=f"Refreshing {plural}...",
            loading_more=f"Loading more {plural}...",
            refresh_failed=f"Failed to refresh {plural}",
            pagination_failed=f"Failed to load more {plural}",
        )


class ListService(Generic[RowT]):
    def __init__(
        self,
        *,
        resource: str,
        source: ListSource,
        table_store: TableStore[RowT],
        filter_store: FilterStore,
        notifications: NotificationCenter | None = None,
        gate: PermissionGate | None = None,
        capability: str | None = None,
        eager: str | None = None,
        messages: ListMessages | None = None,
    ) -> None:
        self.resource = resource
        self.source = source
        self.table_store = table_store
        self.filter_store = filter_store
        self.notifications = notifications or NotificationCenter()
        self.gate = gate
        self.capability = capability
        self.eager = eager
        self.messages = messages or ListMessages.for_entity(resource)

    @property
    def page_size(self) -> int:
        return self.table_store.page_size

    def ensure_allowed(self) -> None:
        if self.gate is None or self.capability is None:
            return
        try:
            self.gate.require(self.capability)
        except PermissionDeniedError:
            log_action(
                logger, self.resource, "permission_denied", "denied", level=logging.WARNING, capability=self.capability
            )
            raise

    async def fetch_initial(self, filter_params: Mapping[str, Any] | None = None) -> ListPage[RowT]:
        self.ensure_allowed()
        params = self.filter_store.get_query_params() if filter_params is None else dict(filter_params)
        generation = self.table_store.begin_generation()
        query = self._query(params, 0, self.page_size - 1)
        try:
            page = await self.source.list(query)
        except Exception as exc:
            error = self._normalize_error(exc)
            log_action(
                logger,
                self.resource,
                "fetch_initial",
                "error",
                level=logging.ERROR,
                code=error.code,
                status_code=error.status_code,
                trace_id=error.trace_id,
            )
            if error is exc:
                raise
            raise error from exc

        current = self.table_store.generation
        if current != generation:
            log_action(
                logger, self.resource, "fetch_initial", "superseded", generation=generation, current_generation=current
            )
            raise SupersededFetchError(self.resource, generation, current)

        self.table_store.init(page.rows, page.total)
        log_action(
            logger,
            self.resource,
            "fetch_initial",
            "success",
            rows=len(page.rows),
            total=page.total,
            generation=generation,
        )
        return page

    async def fetch_more(self, *, current_page: int, next_page: int, total: int) -> list[RowT]:
        """Fetch rows after ``current_page`` up to the end of ``next_page``.

        Returns an empty list without calling the source when the range starts
        past the last known row. The store is not touched.
        """
        range_start = current_page * self.page_size
        range_end = next_page * self.page_size - 1
        if range_start > total - 1:
            log_action(
                logger, self.resource, "fetch_more", "end_of_data", range_start=range_start, total=total
            )
            return []

        self.ensure_allowed()
        query = self._query(self.filter_store.get_query_params(), range_start, range_end)
        try:
            page = await self.source.list(query)
        except Exception as exc:
            error = self._normalize_error(exc)
            log_action(
                logger,
                self.resource,
                "fetch_more",
                "error",
                level=logging.ERROR,
                range_start=range_start,
                range_end=range_end,
                code=error.code,
                trace_id=error.trace_id,
            )
            if error is exc:
                raise
            raise error from exc

        log_action(
            logger,
            self.resource,
            "fetch_more",
            "fetched",
            range_start=range_start,
            range_end=range_end,
            rows=len(page.rows),
        )
        return list(page.rows)

    def _is_resident(self, page: int) -> bool:
        store = self.table_store
        if page <= store.current_page or page * self.page_size <= store.row_count:
            return True
        # a short last page counts once every row up to the known total is held
        return (page - 1) * self.page_size < store.row_count and store.row_count >= store.total_results > 0

    async def handle_pagination(self, page: int) -> None:
        store = self.table_store
        if page < 1 or page == store.current_page:
            return

        if self._is_resident(page):
            store.set_current_page(page)
            log_action(logger, self.resource, "pagination", "resident", page=page)
            return

        generation = store.generation
        held = store.row_count
        toast = self.notifications.show_loading(self.messages.loading_more)
        try:
            # resume after the last resident page so paging back then jumping
            # forward never fetches rows that are already accumulated
            rows = await self.fetch_more(
                current_page=store.resident_pages,
                next_page=page,
                total=store.total_results,
            )
        except ApiError as exc:
            self.notifications.error(to_user_message(exc, self.resource), title=self.messages.pagination_failed)
            log_action(
                logger,
                self.resource,
                "pagination",
                "failed",
                level=logging.WARNING,
                page=page,
                code=exc.code,
                trace_id=exc.trace_id,
            )
            return
        finally:
            self.notifications.dismiss(toast)

        if store.generation != generation:
            log_action(
                logger,
                self.resource,
                "pagination",
                "stale_discarded",
                page=page,
                rows=len(rows),
                generation=generation,
                current_generation=store.generation,
            )
            return
        if store.row_count != held:
            # an overlapping request already appended rows from the same offset
            log_action(logger, self.resource, "pagination", "overlap_discarded", page=page, rows=len(rows))
            if self._is_resident(page):
                store.set_current_page(page)
            return
        if not rows:
            return

        store.add_to_rows(rows, page)
        log_action(logger, self.resource, "pagination", "fetched", page=page, rows=len(rows))

    async def refresh(self) -> None:
        filters = self.filter_store.get_query_params()
        self.table_store.reset()
        toast = self.notifications.show_loading(self.messages.refreshing)
        try:
            await self.fetch_initial(filters)
        except SupersededFetchError:
            return
        except ApiError as exc:
            self.notifications.error(to_user_message(exc, self.resource), title=self.messages.refresh_failed)
            log_action(
                logger, self.resource, "refresh", "failed", level=logging.WARNING, code=exc.code, trace_id=exc.trace_id
            )
            return
        finally:
            self.notifications.dismiss(toast)
        log_action(logger, self.resource, "refresh", "success", total=self.table_store.total_results)

    async def apply_filters(self, filters: Mapping[str, Any]) -> None:
        self.filter_store.apply_filters(filters)
        await self.refresh()

    async def clear_filters(self) -> None:
        self.filter_store.clear_filters()
        await self.refresh()

    async def set_sorting(self, field: str, direction: SortDirection | str) -> None:
        self.filter_store.set_sorting(field, direction)
        await self.refresh()

    async def run_mutation(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        pending: str,
        success: str,
        failure: str = "Operation failed",
    ) -> T:
        """Run a create/update/delete, then refresh so counts and membership match the server."""
        toast = self.notifications.show_loading(pending)
        try:
            result = await operation()
        except Exception as exc:
            error = self._normalize_error(exc)
            self.notifications.error(error.message, title=failure)
            log_action(
                logger,
                self.resource,
                "mutation",
                "failed",
                level=logging.ERROR,
                code=error.code,
                trace_id=error.trace_id,
            )
            if error is exc:
                raise
            raise error from exc
        finally:
            self.notifications.dismiss(toast)

        self.notifications.success(success)
        log_action(logger, self.resource, "mutation", "success")
        await self.refresh()
        return result

    def _query(self, params: Mapping[str, Any], range_start: int, range_end: int) -> dict[str, Any]:
        query = {**params, "range_start": range_start, "range_end": range_end}
        if self.eager and "eager" not in query:
            query["eager"] = self.eager
        return query

    @staticmethod
    def _normalize_error(exc: Exception) -> ApiError:
        if isinstance(exc, ApiError):
            return exc
        return ApiError(
            code="UNEXPECTED_ERROR",
            message=str(exc) or "Unexpected error",
            details={"type": type(exc).__name__},
            trace_id=None,
            status_code=0,
        )
