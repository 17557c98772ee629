"""Tests for state/highlight.py — HighlightScheduler."""

from __future__ import annotations

import pytest

from json_explorer.engine.search_index import SearchMatch
from json_explorer.state.highlight import HighlightScheduler
from json_explorer.state.navigator import FlashEvent
from json_explorer.tree.paths import JsonPath


def _event(path: str) -> FlashEvent:
    p = JsonPath.parse(path)
    return FlashEvent(
        path=p,
        match=SearchMatch(kind="value", path=p, matched_text="x", priority=5),
        settle_delay=0.1,
        duration=2.0,
    )


@pytest.fixture
def calls():
    return []


@pytest.fixture
def scheduler(calls, fake_timers):
    return HighlightScheduler(
        on_scroll=lambda p: calls.append(("scroll", str(p))),
        on_flash=lambda p: calls.append(("flash", str(p))),
        on_unflash=lambda p: calls.append(("unflash", str(p))),
        timer_factory=fake_timers,
    )


class TestHighlightScheduler:

    def test_waits_for_layout_before_scrolling(self, scheduler, calls, fake_timers):
        scheduler.schedule(_event("a.0"))
        assert calls == []
        assert fake_timers.created[0].delay == 0.1

    def test_full_cycle(self, scheduler, calls, fake_timers):
        scheduler.schedule(_event("a.0"))
        fake_timers.created[0].fire()
        assert calls == [("scroll", "a.0"), ("flash", "a.0")]
        assert fake_timers.created[1].delay == 2.0
        fake_timers.created[1].fire()
        assert calls[-1] == ("unflash", "a.0")

    def test_new_event_cancels_pending(self, scheduler, calls, fake_timers):
        scheduler.schedule(_event("a.0"))
        fake_timers.created[0].fire()
        scheduler(_event("a.1"))
        assert fake_timers.created[1].cancelled
        fake_timers.created[1].fire()
        assert ("unflash", "a.0") not in calls
        fake_timers.created[2].fire()
        assert calls[-2:] == [("scroll", "a.1"), ("flash", "a.1")]

    def test_cancel(self, scheduler, calls, fake_timers):
        scheduler.schedule(_event("a.0"))
        scheduler.cancel()
        fake_timers.created[0].fire()
        assert calls == []

    def test_driven_by_navigator_events(self, calls, fake_timers):
        from json_explorer.session import JsonExplorer

        explorer = JsonExplorer()
        scheduler = HighlightScheduler(
            on_scroll=lambda p: calls.append(("scroll", str(p))),
            on_flash=lambda p: calls.append(("flash", str(p))),
            on_unflash=lambda p: calls.append(("unflash", str(p))),
            timer_factory=fake_timers,
        )
        explorer.on_flash(scheduler)
        explorer.set_input('{"a": {"b": "needle"}}')
        explorer.set_query("needle")
        fake_timers.created[-1].fire()
        assert calls == [("scroll", "a.b"), ("flash", "a.b")]
