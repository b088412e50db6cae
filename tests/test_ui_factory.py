from __future__ import annotations

import asyncio

from church_admin.state.async_state import SuccessState
from church_admin.ui.ui_factory import create_success_state, default_row_renderer


def _state(service, page):
    return create_success_state(
        page,
        table_store=service.table_store,
        filter_store=service.filter_store,
        service=service,
    )


def test_success_state_exposes_totals_and_pagination(make_rows, fake_source, build_service) -> None:
    service = build_service(fake_source(make_rows(23)))
    page = asyncio.run(service.fetch_initial())

    state = _state(service, page)

    assert isinstance(state, SuccessState)
    view = state.data
    assert view.resource == "members"
    assert view.total == 23
    assert view.pagination.current == 1
    assert view.pagination.page_size == 10
    assert view.pagination.total == 23
    assert view.pagination.on_change == service.handle_pagination
    assert view.actions.refresh == service.refresh
    assert state.refresh == service.refresh
    assert view.pagination.render() == {"current": 1, "page_size": 10, "total": 23, "page_count": 3}


def test_closures_follow_live_store_state(make_rows, fake_source, build_service) -> None:
    rows = make_rows(23)
    service = build_service(fake_source(rows))
    page = asyncio.run(service.fetch_initial())
    first = _state(service, page).data

    asyncio.run(first.pagination.on_change(2))
    _state(service, page)
    first.actions.toggle_select(rows[11])
    first.actions.expand(rows[12])

    rendered = first.render_rows()
    assert rendered["page"] == 2
    assert rendered["count"] == 10
    assert rendered["rows"][0]["index"] == 11
    assert rendered["rows"][0]["id"] == "row-10"
    assert rendered["rows"][1]["selected"] is True
    assert rendered["rows"][2]["expanded"] is True
    assert service.table_store.is_selected(rows[11])


def test_filter_snapshot_is_captured_but_actions_are_live(make_rows, fake_source, build_service) -> None:
    source = fake_source(make_rows(23))
    service = build_service(source)
    service.filter_store.set_filter("name", "Row")
    page = asyncio.run(service.fetch_initial())

    view = _state(service, page).data
    asyncio.run(view.filters.apply_filters({"name": "Row 2"}))

    assert view.filters.values["name"] == "Row"
    assert service.filter_store.get("name") == "Row 2"
    assert source.calls[-1]["name"] == "Row 2"

    view.filters.toggle_panel()
    view.filters.set_filter("fellowship_id", "f-1")
    assert service.filter_store.panel_visible is True
    assert len(source.calls) == 2


def test_render_combines_sections(make_rows, fake_source, build_service) -> None:
    service = build_service(fake_source(make_rows(3)))
    page = asyncio.run(service.fetch_initial())

    rendered = _state(service, page).render()

    assert rendered["type"] == "success"
    data = rendered["data"]
    assert data["total"] == 3
    assert data["filters"]["sort_field"] == "name"
    assert data["table"]["count"] == 3


def test_default_row_renderer_on_empty_store(build_service, fake_source) -> None:
    service = build_service(fake_source([]))

    rendered = default_row_renderer(service.table_store.rows, service.table_store)

    assert rendered == {"page": 1, "count": 0, "rows": []}
