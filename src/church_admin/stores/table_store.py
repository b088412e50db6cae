from __future__ import annotations

from typing import Generic, Hashable, Iterable, Sequence

from ..models import ListPage, RowT
from ..state.async_state import LocalSnapshot
from .base import ObservableStore


class TableStore(ObservableStore, Generic[RowT]):
    """Rows accumulated for one list screen plus its pagination and selection.

    Rows are appended page by page and are only ever replaced wholesale by
    ``init``. Every ``reset`` opens a new generation so that fetches started
    against an older query can tell they are no longer wanted.
    """

    def __init__(self, resource: str, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be a positive integer")
        super().__init__()
        self.resource = resource
        self.page_size = page_size
        self._rows: list[RowT] = []
        self._selected: dict[Hashable, RowT] = {}
        self._expanded_id: Hashable | None = None
        self._current_page = 1
        self._total_results = 0
        self._generation = 0

    @property
    def rows(self) -> tuple[RowT, ...]:
        return tuple(self._rows)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def selected(self) -> list[RowT]:
        return list(self._selected.values())

    @property
    def expanded_id(self) -> Hashable | None:
        return self._expanded_id

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_results(self) -> int:
        return self._total_results

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_data(self) -> bool:
        return bool(self._rows)

    @property
    def resident_pages(self) -> int:
        return -(-len(self._rows) // self.page_size)

    def init(self, rows: Iterable[RowT], total_results: int) -> None:
        self._rows = list(rows)
        self._total_results = total_results
        self._current_page = 1
        self._selected = {}
        self._notify()

    def add_to_rows(self, new_rows: Sequence[RowT], target_page: int) -> None:
        self._rows.extend(new_rows)
        self._current_page = target_page
        self._notify()

    def set_current_page(self, page: int) -> None:
        if page < 1:
            raise ValueError("page must be >= 1")
        self._current_page = page
        self._notify()

    def page_rows(self, page: int | None = None) -> list[RowT]:
        page = self._current_page if page is None else page
        start = (page - 1) * self.page_size
        return self._rows[start : start + self.page_size]

    def is_selected(self, row: RowT) -> bool:
        return row.id in self._selected

    def toggle_select(self, row: RowT) -> None:
        if row.id in self._selected:
            del self._selected[row.id]
        else:
            self._selected[row.id] = row
        self._notify()

    def set_selected(self, rows: Iterable[RowT]) -> None:
        self._selected = {row.id: row for row in rows}
        self._notify()

    def clear_selection(self) -> None:
        self._selected = {}
        self._notify()

    def is_expanded(self, row: RowT) -> bool:
        return self._expanded_id is not None and self._expanded_id == row.id

    def expand(self, row: RowT) -> None:
        # expanding the open row collapses it
        self._expanded_id = None if self._expanded_id == row.id else row.id
        self._notify()

    def collapse_all(self) -> None:
        self._expanded_id = None
        self._notify()

    def begin_generation(self) -> int:
        self._generation += 1
        return self._generation

    def reset(self) -> None:
        self._rows = []
        self._selected = {}
        self._expanded_id = None
        self._current_page = 1
        self._total_results = 0
        self._generation += 1
        self._notify()

    def snapshot(self) -> LocalSnapshot[ListPage[RowT]]:
        return LocalSnapshot(
            resource=self.resource,
            has_data=self.has_data,
            data=ListPage(rows=self.rows, total=self._total_results),
        )
