"""Debounced callbacks - Imperative Shell.

Collapses a burst of notifications into a single delayed call that sees
only the last arguments. A new trigger before the delay elapses cancels
the pending call and reschedules it (last write wins, no queue).
"""

import functools
import logging
import threading
from typing import Any, Callable


logger = logging.getLogger(__name__)


# Timer factories take (delay_seconds, function) and return an object with
# start() and cancel(), like threading.Timer
TimerFactory = Callable[[float, Callable[[], None]], Any]


class Debouncer:
    """Schedules a callback after a quiet period.

    Holds a single pending-timer handle. Timers fire on their own thread,
    so the handle and pending arguments are guarded by a lock, and each
    scheduled timer carries a generation number so a timer that was
    cancelled too late to stop still does nothing.
    """

    def __init__(
        self,
        delay_seconds: float,
        callback: Callable[..., None],
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        """Initialize debouncer.

        Args:
            delay_seconds: Quiet period before the callback runs
            callback: Function to call with the last triggered arguments
            timer_factory: Creates cancelable timers (threading.Timer by default)
        """
        self.delay_seconds = delay_seconds
        self.callback = callback
        self.timer_factory = timer_factory

        self._lock = threading.Lock()
        self._timer: Any = None
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """True if a call is scheduled and hasn't run yet."""
        with self._lock:
            return self._pending is not None

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        """Schedule the callback, replacing any pending call."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()

            self._generation += 1
            self._pending = (args, kwargs)

            timer = self.timer_factory(
                self.delay_seconds,
                functools.partial(self._fire, self._generation),
            )
            timer.daemon = True
            self._timer = timer

        timer.start()

    def cancel(self) -> bool:
        """Drop the pending call, if any.

        Returns:
            True if a pending call was dropped
        """
        with self._lock:
            had_pending = self._pending is not None
            self._clear()
        return had_pending

    def flush(self) -> bool:
        """Run the pending call immediately, if any.

        Returns:
            True if a pending call was run
        """
        with self._lock:
            pending = self._pending
            self._clear()

        if pending is None:
            return False

        args, kwargs = pending
        self.callback(*args, **kwargs)
        return True

    def _clear(self) -> None:
        # Caller holds the lock
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._pending = None
        self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending is None:
                logger.debug("Skipping superseded debounced call")
                return
            args, kwargs = self._pending
            self._pending = None
            self._timer = None

        self.callback(*args, **kwargs)
