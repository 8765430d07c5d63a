"""Tests for the debouncer.

Timers are replaced by a fake that records scheduling and fires on demand,
so tests are deterministic and never sleep.
"""

import threading
import time
from unittest.mock import Mock

from quakefeed.shell.debounce import Debouncer


class FakeTimer:
    """Stand-in for threading.Timer that fires only when told to."""

    def __init__(self, delay, function):
        self.delay = delay
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # A real timer that was cancelled too late still runs its function
        self.function()


class FakeTimerFactory:
    """Records every timer created."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, function):
        timer = FakeTimer(delay, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


class TestDebouncer:
    """Tests for Debouncer."""

    def setup_method(self):
        self.callback = Mock()
        self.timers = FakeTimerFactory()
        self.debouncer = Debouncer(0.15, self.callback, timer_factory=self.timers)

    def test_schedules_daemon_timer(self):
        self.debouncer.trigger("a")

        timer = self.timers.last
        assert timer.delay == 0.15
        assert timer.started
        assert timer.daemon
        assert self.debouncer.pending
        self.callback.assert_not_called()

    def test_fires_with_last_arguments(self):
        self.debouncer.trigger("a")
        self.debouncer.trigger("b", key="value")

        self.timers.last.fire()

        self.callback.assert_called_once_with("b", key="value")
        assert not self.debouncer.pending

    def test_burst_cancels_earlier_timers(self):
        for value in range(5):
            self.debouncer.trigger(value)

        assert len(self.timers.timers) == 5
        assert all(t.cancelled for t in self.timers.timers[:-1])
        assert not self.timers.last.cancelled

    def test_superseded_timer_does_nothing(self):
        """A timer that fires after being replaced is ignored."""
        self.debouncer.trigger("first")
        stale = self.timers.last
        self.debouncer.trigger("second")

        stale.fire()
        self.callback.assert_not_called()

        self.timers.last.fire()
        self.callback.assert_called_once_with("second")

    def test_cancel(self):
        self.debouncer.trigger("a")

        assert self.debouncer.cancel() is True
        assert self.timers.last.cancelled
        assert not self.debouncer.pending

        self.timers.last.fire()
        self.callback.assert_not_called()

    def test_cancel_without_pending(self):
        assert self.debouncer.cancel() is False

    def test_flush_runs_immediately(self):
        self.debouncer.trigger("a")

        assert self.debouncer.flush() is True
        self.callback.assert_called_once_with("a")
        assert self.timers.last.cancelled

        self.timers.last.fire()
        assert self.callback.call_count == 1

    def test_flush_without_pending(self):
        assert self.debouncer.flush() is False
        self.callback.assert_not_called()

    def test_fires_once_per_burst(self):
        self.debouncer.trigger(1)
        self.timers.last.fire()
        self.timers.last.fire()

        assert self.callback.call_count == 1


class TestDebouncerWithRealTimers:
    """Smoke test against threading.Timer."""

    def test_fires_after_quiet_period(self):
        fired = threading.Event()
        received = []

        def callback(value):
            received.append(value)
            fired.set()

        debouncer = Debouncer(0.01, callback)
        debouncer.trigger(1)
        debouncer.trigger(2)

        assert fired.wait(timeout=2.0)
        time.sleep(0.05)
        assert received == [2]
