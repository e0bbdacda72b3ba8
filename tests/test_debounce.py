"""Tests for the search debouncer."""

import asyncio

import pytest

from movie_discovery.debounce import Debouncer


class FakeHandle:
    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeLoop:
    """Manual clock exposing the bits of the event loop the debouncer uses."""

    def __init__(self):
        self.now = 0
        self.handles: list[FakeHandle] = []

    def time(self):
        return self.now

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    def advance_to(self, t):
        while True:
            due = [h for h in self.handles if not h.cancelled and h.when <= t]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.handles.remove(handle)
            self.now = handle.when
            handle.callback(*handle.args)
        self.now = t


@pytest.fixture
def loop():
    return FakeLoop()


class TestDebouncer:
    """Tests for Debouncer."""

    def test_settles_once_after_quiet_period(self, loop):
        """Keystrokes at 0, 100, 200, 600 settle once at 1100 with the last value."""
        settled = []
        debouncer = Debouncer(500, lambda v: settled.append((loop.time(), v)), loop=loop)

        for t, value in [(0, "d"), (100, "du"), (200, "dun"), (600, "dune")]:
            loop.advance_to(t)
            debouncer.push(value)

        loop.advance_to(1099)
        assert settled == []
        loop.advance_to(5000)
        assert settled == [(1100, "dune")]

    def test_separate_bursts_settle_separately(self, loop):
        """Each quiet period produces its own settle event."""
        settled = []
        debouncer = Debouncer(500, settled.append, loop=loop)

        debouncer.push("a")
        loop.advance_to(600)
        debouncer.push("ab")
        loop.advance_to(1200)

        assert settled == ["a", "ab"]

    def test_close_drops_pending_value(self, loop):
        """Closing the debouncer never emits the pending value."""
        settled = []
        debouncer = Debouncer(500, settled.append, loop=loop)

        debouncer.push("dune")
        assert debouncer.pending
        debouncer.close()
        loop.advance_to(1000)

        assert settled == []
        assert not debouncer.pending
        with pytest.raises(RuntimeError):
            debouncer.push("again")

    def test_cancel_keeps_debouncer_usable(self, loop):
        """Cancel drops the pending settle but accepts new input."""
        settled = []
        debouncer = Debouncer(500, settled.append, loop=loop)

        debouncer.push("x")
        debouncer.cancel()
        debouncer.push("y")
        loop.advance_to(500)

        assert settled == ["y"]

    @pytest.mark.asyncio
    async def test_uses_running_loop(self):
        """Without an injected loop the running event loop schedules settles."""
        settled = []
        debouncer = Debouncer(0.01, settled.append)

        debouncer.push("a")
        debouncer.push("ab")
        await asyncio.sleep(0.05)

        assert settled == ["ab"]
