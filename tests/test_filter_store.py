from __future__ import annotations

import pytest

from church_admin.stores.filter_store import FilterField, FilterStore, SortDirection


def _store() -> FilterStore:
    return FilterStore(
        [FilterField("name"), FilterField("chairman_id"), FilterField("has_members")],
        default_sort="name",
    )


def test_defaults() -> None:
    store = _store()

    assert store.filters_applied is False
    assert store.panel_visible is False
    assert store.get_query_params() == {"order_by": "name"}


def test_empty_string_does_not_count_as_applied() -> None:
    store = _store()

    store.apply_filters({"name": ""})

    assert store.filters_applied is False
    assert "name" not in store.get_query_params()


def test_non_empty_value_counts_as_applied() -> None:
    store = _store()

    store.apply_filters({"name": "Grace"})

    assert store.filters_applied is True
    assert store.get_query_params()["name"] == "Grace"


def test_false_is_a_real_filter_value() -> None:
    store = _store()

    store.set_filter("has_members", False)

    assert store.filters_applied is True
    assert store.get_query_params()["has_members"] is False


def test_sort_is_mutually_exclusive() -> None:
    store = _store()

    store.set_sorting("name", SortDirection.DESC)
    params = store.get_query_params()

    assert params == {"order_by_desc": "name"}
    assert "order_by" not in params
    assert store.sort_direction is SortDirection.DESC

    store.set_sorting("created_at", "asc")

    assert store.get_query_params() == {"order_by": "created_at"}
    assert store.sort_field == "created_at"


def test_sorting_does_not_mark_filters_applied() -> None:
    store = _store()

    store.set_sorting("name", SortDirection.DESC)

    assert store.filters_applied is False


def test_clear_filters_restores_defaults_and_keeps_panel_open() -> None:
    store = _store()
    store.apply_filters({"name": "Grace", "chairman_id": "m-1"})
    store.set_sorting("name", SortDirection.DESC)

    store.clear_filters()

    assert store.filters_applied is False
    assert store.panel_visible is True
    assert store.get_query_params() == {"order_by": "name"}


def test_non_empty_default_counts_as_unset() -> None:
    store = FilterStore([FilterField("status", default="ACTIVE")])

    assert store.filters_applied is False
    assert store.get_query_params() == {"status": "ACTIVE"}

    store.set_filter("status", "ARCHIVED")

    assert store.filters_applied is True


def test_toggle_panel_and_subscribe() -> None:
    store = _store()
    seen: list[bool] = []
    unsubscribe = store.subscribe(lambda: seen.append(store.panel_visible))

    store.toggle_panel()
    store.toggle_panel()
    unsubscribe()
    store.toggle_panel()

    assert seen == [True, False]


def test_unknown_field_is_rejected() -> None:
    store = _store()

    with pytest.raises(KeyError):
        store.set_filter("color", "red")
    with pytest.raises(KeyError):
        store.apply_filters({"name": "Ann", "color": "red"})


def test_snapshot_is_detached_from_later_changes() -> None:
    store = _store()
    store.set_filter("name", "Joy")

    snapshot = store.snapshot()
    store.set_filter("name", "Hope")

    assert snapshot.values["name"] == "Joy"
    assert snapshot.render()["sort_direction"] == "asc"
