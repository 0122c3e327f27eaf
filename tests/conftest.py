"""Shared pytest fixtures for search function tests."""

from __future__ import annotations

import asyncio

import pytest

from omnisearch import SearchFunction, contains_ignore_case
from omnisearch.config import get_settings

FRUITS = ["Apple", "Banana", "Orange", "Pineapple"]

# Short enough to keep tests fast, long enough to supersede a query in time
DEBOUNCE = 0.02


class FakeRemote:
    """Remote search double that records queries and can be held open."""

    def __init__(self, results=None, error: Exception | None = None) -> None:
        self.results = results or {}
        self.error = error
        self.calls: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}

    def hold(self, query: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[query] = gate
        return gate

    async def __call__(self, query: str):
        self.calls.append(query)
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.results.get(query, []))


class Recorder:
    """Collects every snapshot emitted on a stream."""

    def __init__(self) -> None:
        self.results = []

    def __call__(self, result) -> None:
        self.results.append(result)

    def for_query(self, query: str):
        return [r for r in self.results if r.query == query]

    @property
    def remote(self):
        return [r for r in self.results if r.is_remote]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in ("OMNISEARCH_DEBOUNCE_MS", "OMNISEARCH_MIN_REMOTE_QUERY_LENGTH"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def search_function(remote, recorder):
    function = SearchFunction(
        remote,
        contains_ignore_case,
        initial_data=FRUITS,
        debounce_duration=DEBOUNCE,
    )
    function.results_stream.subscribe(recorder)
    yield function
    function.dispose()


async def settle(delay: float = DEBOUNCE * 3) -> None:
    """Let the debounce elapse and pending tasks run."""
    await asyncio.sleep(delay)
