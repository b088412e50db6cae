from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence

from .base import ObservableStore


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class FilterField:
    name: str
    default: Any = None


@dataclass(frozen=True)
class FilterSnapshot:
    values: Mapping[str, Any]
    sort_field: str | None
    sort_direction: SortDirection
    filters_applied: bool
    panel_visible: bool

    def render(self) -> dict[str, Any]:
        return {
            "values": dict(self.values),
            "sort_field": self.sort_field,
            "sort_direction": self.sort_direction.value,
            "filters_applied": self.filters_applied,
            "panel_visible": self.panel_visible,
        }


def _normalize(value: Any) -> Any:
    return None if value == "" else value


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


class FilterStore(ObservableStore):
    """Filter and sort criteria for one list screen.

    Filter values narrow the remote query and are never validated here.
    Field names are checked: setting or applying a field the store was not
    built with raises ``KeyError``.

    Sorting is held as two mutually exclusive fields, ``order_by`` for
    ascending and ``order_by_desc`` for descending.
    """

    def __init__(
        self,
        fields: Sequence[FilterField],
        default_sort: str | None = None,
        default_direction: SortDirection = SortDirection.ASC,
    ) -> None:
        super().__init__()
        self._fields = {field.name: field for field in fields}
        self._default_sort = default_sort
        self._default_direction = default_direction
        self._values: dict[str, Any] = {}
        self._order_by: str | None = None
        self._order_by_desc: str | None = None
        self._panel_visible = False
        self._restore_defaults()

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def panel_visible(self) -> bool:
        return self._panel_visible

    @property
    def sort_field(self) -> str | None:
        return self._order_by_desc or self._order_by

    @property
    def sort_direction(self) -> SortDirection:
        return SortDirection.DESC if self._order_by_desc else SortDirection.ASC

    @property
    def filters_applied(self) -> bool:
        return any(
            _normalize(self._values.get(name)) != _normalize(field.default)
            for name, field in self._fields.items()
        )

    def get(self, key: str) -> Any:
        self._check_field(key)
        return self._values.get(key)

    def set_filter(self, key: str, value: Any) -> None:
        self._check_field(key)
        self._values[key] = value
        self._notify()

    def apply_filters(self, filters: Mapping[str, Any]) -> None:
        for key in filters:
            self._check_field(key)
        self._values.update(filters)
        self._notify()

    def clear_filters(self) -> None:
        self._restore_defaults()
        # clearing keeps the panel open
        self._panel_visible = True
        self._notify()

    def toggle_panel(self) -> None:
        self._panel_visible = not self._panel_visible
        self._notify()

    def set_sorting(self, field: str, direction: SortDirection | str) -> None:
        self._apply_sort(field, SortDirection(direction))
        self._notify()

    def get_query_params(self) -> dict[str, Any]:
        params = {name: value for name, value in self._values.items() if _is_set(value)}
        if self._order_by_desc:
            params["order_by_desc"] = self._order_by_desc
        elif self._order_by:
            params["order_by"] = self._order_by
        return params

    def snapshot(self) -> FilterSnapshot:
        return FilterSnapshot(
            values=self.values,
            sort_field=self.sort_field,
            sort_direction=self.sort_direction,
            filters_applied=self.filters_applied,
            panel_visible=self._panel_visible,
        )

    def _restore_defaults(self) -> None:
        self._values = {name: field.default for name, field in self._fields.items()}
        self._order_by = None
        self._order_by_desc = None
        if self._default_sort:
            self._apply_sort(self._default_sort, self._default_direction)
        self._panel_visible = False

    def _apply_sort(self, field: str, direction: SortDirection) -> None:
        if direction is SortDirection.ASC:
            self._order_by, self._order_by_desc = field, None
        else:
            self._order_by, self._order_by_desc = None, field

    def _check_field(self, key: str) -> None:
        if key not in self._fields:
            raise KeyError(f"Unknown filter field: {key}")
