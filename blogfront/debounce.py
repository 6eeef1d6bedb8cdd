"""Trailing-edge debouncing for search input.

Timers come from a :class:`Scheduler`. A running :mod:`asyncio` loop is one
(``loop.call_later`` returns a cancellable ``TimerHandle``); tests use
:class:`ManualClock` to move time forward explicitly.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Any, Callable, Protocol

DEFAULT_SEARCH_DELAY = 0.3
CLEAR_KEY = "Escape"
SUBMIT_KEY = "Enter"

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:  # pragma: no cover - Protocol
        ...


class Scheduler(Protocol):
    """Anything able to run a callback after ``delay`` seconds."""

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:  # pragma: no cover - Protocol
        ...


class ManualTimer:
    """Timer handle returned by :class:`ManualClock`."""

    __slots__ = ("when", "callback", "args", "cancelled")

    def __init__(self, when: float, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Virtual clock: scheduled callbacks only run when :meth:`advance` is called."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, ManualTimer]] = []
        self._counter = itertools.count()

    def time(self) -> float:
        return self._now

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> ManualTimer:
        timer = ManualTimer(self._now + max(delay, 0.0), callback, args)
        heapq.heappush(self._queue, (timer.when, next(self._counter), timer))
        return timer

    def advance(self, seconds: float) -> int:
        """Move time forward, running due callbacks in order; return how many ran."""

        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = when
            timer.callback(*timer.args)
            ran += 1
        self._now = target
        return ran

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)


class Debouncer:
    """Run ``callback`` once input has been quiet for ``delay`` seconds.

    Every :meth:`trigger` cancels the pending call and schedules a new one
    with the latest arguments. There is no leading-edge call and no max wait.
    """

    def __init__(
        self, scheduler: Scheduler, delay: float, callback: Callable[..., Any]
    ) -> None:
        self._scheduler = scheduler
        self.delay = delay
        self._callback = callback
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, *args: Any) -> None:
        self.cancel()
        self._handle = self._scheduler.call_later(self.delay, self._fire, *args)

    def fire_now(self, *args: Any) -> None:
        """Drop any pending call and invoke the callback immediately."""

        self.cancel()
        self._callback(*args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, *args: Any) -> None:
        self._handle = None
        self._callback(*args)


class SearchDebouncer:
    """Debounced bridge between a search box and a search callback."""

    def __init__(
        self,
        scheduler: Scheduler,
        on_search: Callable[[str], Any],
        *,
        delay: float = DEFAULT_SEARCH_DELAY,
    ) -> None:
        self.value = ""
        self._debouncer = Debouncer(scheduler, delay, on_search)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def handle_input(self, text: str) -> None:
        """Record the full current text of the box and reschedule the search."""

        self.value = text
        self._debouncer.trigger(text.strip())

    def handle_key(self, key: str) -> bool:
        """Handle a key press; return True when the key was consumed."""

        if key == SUBMIT_KEY:
            return True
        if key == CLEAR_KEY:
            logger.debug("Search cleared")
            self.value = ""
            self._debouncer.fire_now("")
            return True
        return False

    def close(self) -> None:
        self._debouncer.cancel()
