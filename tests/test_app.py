"""Tests for the demo application."""

from __future__ import annotations

import pytest

from omnisearch import SearchFunction
from omnisearch_cli import catalog
from omnisearch_cli.app import OmniSearchApp
from omnisearch_cli.components import StatusBar
from omnisearch_cli.widget import SearchFunctionView


@pytest.fixture
def fast_catalog(monkeypatch):
    monkeypatch.setattr(catalog, "REMOTE_DELAY", 0)


def _catalog_search() -> SearchFunction:
    return SearchFunction(
        catalog.mock_remote_search,
        catalog.match_product,
        initial_data=catalog.LOCAL_PRODUCTS,
        debounce_duration=0,
    )


def test_products_compare_by_id():
    a = catalog.Product("1", "A", "", 1.0, "X")
    b = catalog.Product("1", "B", "", 2.0, "Y")

    assert a == b
    assert hash(a) == hash(b)
    assert a != catalog.Product("2", "A", "", 1.0, "X")


@pytest.mark.asyncio
async def test_mock_remote_search_matches_any_field(fast_catalog):
    names = [p.name for p in await catalog.mock_remote_search("audio")]

    assert names == ["Sony WH-1000XM5", "Sonos Beam"]
    assert await catalog.mock_remote_search("") == []


@pytest.mark.asyncio
async def test_remote_results_are_cached_locally(fast_catalog):
    app = OmniSearchApp(_catalog_search())

    async with app.run_test() as pilot:
        status_bar = app.query_one("#status-bar", StatusBar)
        assert status_bar.local_count == 4

        view = app.query_one(SearchFunctionView)
        view.field.value = "tablet"
        await pilot.pause(0.3)

        assert [p.name for p in view.results_view.result.items] == ["iPad Air"]
        assert status_bar.source == "remote"
        assert status_bar.local_count == 5
        assert not status_bar.is_loading


@pytest.mark.asyncio
async def test_add_and_clear_local_products(fast_catalog):
    search_function = _catalog_search()
    app = OmniSearchApp(search_function)

    async with app.run_test() as pilot:
        app.query_one("#add-input").focus()
        await pilot.pause()
        await pilot.press(*"zed", "enter")
        await pilot.pause()

        assert "zed" in [p.name for p in search_function.local_data]
        assert app.query_one("#status-bar", StatusBar).local_count == 5

        await pilot.press("ctrl+l")
        await pilot.pause()

        assert search_function.local_data == ()


@pytest.mark.asyncio
async def test_escape_resets_to_local_list(fast_catalog):
    app = OmniSearchApp(_catalog_search())

    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press(*"laptop")
        await pilot.pause()
        view = app.query_one(SearchFunctionView)
        assert [p.name for p in view.results_view.result.items] == ["MacBook Pro M3"]

        await pilot.press("escape")
        await pilot.pause(0.1)

        assert view.field.value == ""
        assert len(view.results_view.result.items) == 4


@pytest.mark.asyncio
async def test_app_disposes_search_function_on_exit(fast_catalog):
    search_function = _catalog_search()
    app = OmniSearchApp(search_function)

    async with app.run_test() as pilot:
        await pilot.pause()

    assert search_function.is_closed


@pytest.mark.asyncio
async def test_newer_status_message_is_not_cleared_by_older_timer(fast_catalog):
    app = OmniSearchApp(_catalog_search())

    async with app.run_test() as pilot:
        status_bar = app.query_one("#status-bar", StatusBar)

        status_bar.set_message("Added: first", duration=0.1)
        await pilot.pause(0.05)
        status_bar.set_message("Added: second", duration=1.0)
        await pilot.pause(0.2)

        assert status_bar.message == "Added: second"

        status_bar.set_message("Local data cleared", duration=0.05)
        await pilot.pause(0.2)

        assert status_bar.message == ""
