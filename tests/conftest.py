"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from json_explorer.settings import reset_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings, unaffected by the environment."""
    for name in (
        "EXACT_MATCH_PRIORITY",
        "PARTIAL_MATCH_PRIORITY",
        "SEARCH_ARRAY_INDICES",
        "SCROLL_SETTLE_SECONDS",
        "HIGHLIGHT_DURATION_SECONDS",
        "PREVIEW_MAX_STRING_LENGTH",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(f"JSON_EXPLORER_{name}", raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def pair_doc():
    """Two array elements with the same shape."""
    return {"a": [{"x": 1}, {"x": 2}]}


@pytest.fixture
def bob_doc():
    return {"name": "Bob", "nested": {"name": "bob"}}


@pytest.fixture
def catalog_doc():
    """Arrays nested inside arrays, with a keyed object alongside."""
    return {
        "metadata": {"title": "Catalog", "owner": "Alice"},
        "sections": [
            {
                "name": "Hardware",
                "items": [
                    {"label": "Hammer", "tags": ["tool", "steel"]},
                    {"label": "Saw", "tags": ["tool"]},
                    {"label": "Drill", "tags": []},
                ],
            },
            {
                "name": "Garden",
                "items": [
                    {"label": "Rake", "tags": ["tool"]},
                    {"label": "Hose", "tags": ["rubber"]},
                ],
            },
        ],
    }


class FakeTimer:
    """Timer handle that only fires when the test says so."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled and not self.fired:
            self.fired = True
            self.callback()


@pytest.fixture
def fake_timers():
    """Timer factory recording every timer it creates."""
    created: list[FakeTimer] = []

    def factory(delay, callback):
        timer = FakeTimer(delay, callback)
        created.append(timer)
        return timer

    factory.created = created
    return factory
