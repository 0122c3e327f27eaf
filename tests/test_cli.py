"""Tests for the click entry point."""

from __future__ import annotations

import json
import logging

import click
import pytest
import structlog
from click.testing import CliRunner

from omnisearch_cli import catalog
from omnisearch_cli.__main__ import load_items, main


@pytest.fixture(autouse=True)
def fast_catalog(monkeypatch):
    monkeypatch.setattr(catalog, "REMOTE_DELAY", 0)


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_local_hit_prints_local_results_only():
    result = CliRunner().invoke(main, ["search", "laptop", "--debounce", "0"])

    assert result.exit_code == 0, result.output
    assert "1 local results" in result.output
    assert "MacBook Pro M3" in result.output
    assert "remote results" not in result.output


def test_local_miss_waits_for_remote_results():
    result = CliRunner().invoke(main, ["search", "tablet", "--debounce", "0"])

    assert result.exit_code == 0, result.output
    assert "0 local results" in result.output
    assert "searching remote sources" in result.output
    assert "1 remote results" in result.output
    assert "iPad Air" in result.output


def test_force_searches_remote_even_with_local_hits():
    result = CliRunner().invoke(main, ["search", "audio", "--force"])

    assert result.exit_code == 0, result.output
    assert "local results" not in result.output
    assert "2 remote results" in result.output
    assert "Sonos Beam" in result.output


def test_short_query_does_not_wait_for_remote():
    result = CliRunner().invoke(main, ["search", "q", "--debounce", "0"])

    assert result.exit_code == 0, result.output
    assert "0 local results" in result.output
    assert "remote" not in result.output


def test_search_with_data_file(tmp_path):
    data = tmp_path / "fruits.txt"
    data.write_text("Apple\nBanana\n\nOrange\nPineapple\n", encoding="utf-8")

    result = CliRunner().invoke(main, ["search", "an", "--data", str(data)])

    assert result.exit_code == 0, result.output
    assert "2 local results" in result.output
    assert "Banana" in result.output and "Orange" in result.output


def test_search_with_json_fields(tmp_path):
    data = tmp_path / "books.json"
    data.write_text(
        json.dumps([{"name": "Dune", "author": "Herbert"}, {"name": "Emma", "author": "Austen"}]),
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        main, ["search", "austen", "--data", str(data), "--field", "author"]
    )

    assert result.exit_code == 0, result.output
    assert "1 local results" in result.output
    assert "Emma" in result.output


def test_load_items_rejects_json_object(tmp_path):
    data = tmp_path / "bad.json"
    data.write_text('{"name": "Dune"}', encoding="utf-8")

    with pytest.raises(click.BadParameter):
        load_items(data)


def test_log_level_option_enables_debug_events():
    result = CliRunner().invoke(
        main, ["--log-level", "debug", "search", "tablet", "--debounce", "0"]
    )

    assert result.exit_code == 0, result.output
    assert "Remote search scheduled" in result.output
