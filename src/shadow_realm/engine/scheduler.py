"""Cancellable delayed callbacks for the opponent turn.

The battle engine never sleeps or spawns threads. It asks a TurnScheduler
to run a callback later and keeps the returned handle so the callback can
be cancelled when the battle ends. Two implementations ship:

- ManualScheduler: a virtual clock advanced explicitly; synchronous
  front ends and tests drive it.
- AsyncioScheduler: delegates to an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from shadow_realm.core.logging import get_logger


logger = get_logger(__name__)


class ScheduledHandle(Protocol):
    """Handle to a pending callback."""

    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class TurnScheduler(Protocol):
    """Anything that can run a callback after a delay."""

    def call_later(self, delay: float, callback: Callable[[], object]) -> ScheduledHandle: ...


# =============================================================================
# Manual scheduler
# =============================================================================


@dataclass(order=True)
class ManualHandle:
    """Pending callback of a ManualScheduler.

    Attributes:
        when: Virtual time the callback is due.
        sequence: Tie-breaker preserving scheduling order.
        callback: The callable to run.
    """

    when: float
    sequence: int
    callback: Callable[[], object] = field(compare=False)
    _cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """Scheduler on a virtual clock.

    Example:
        >>> scheduler = ManualScheduler()
        >>> fired = []
        >>> _ = scheduler.call_later(2.0, lambda: fired.append(True))
        >>> scheduler.advance(1.0)
        0
        >>> scheduler.advance(1.0)
        1
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[ManualHandle] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        """Current virtual time in seconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of callbacks still due to run."""
        return sum(1 for h in self._queue if not h.cancelled())

    def call_later(self, delay: float, callback: Callable[[], object]) -> ManualHandle:
        """Schedule a callback ``delay`` virtual seconds from now."""
        handle = ManualHandle(
            when=self._now + max(0.0, delay),
            sequence=next(self._counter),
            callback=callback,
        )
        heapq.heappush(self._queue, handle)
        logger.debug("Callback scheduled", delay=delay, due=handle.when)
        return handle

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every callback that became due.

        Callbacks scheduled while advancing run too if they fall inside
        the window.

        Returns:
            Number of callbacks run.
        """
        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0].when <= target:
            handle = heapq.heappop(self._queue)
            self._now = handle.when
            if handle.cancelled():
                continue
            handle.callback()
            ran += 1
        self._now = target
        return ran

    def run_all(self) -> int:
        """Run every pending callback regardless of its due time.

        Returns:
            Number of callbacks run.
        """
        ran = 0
        while self._queue:
            handle = heapq.heappop(self._queue)
            self._now = max(self._now, handle.when)
            if handle.cancelled():
                continue
            handle.callback()
            ran += 1
        return ran


# =============================================================================
# asyncio scheduler
# =============================================================================


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to use. Defaults to the running loop at the
                time a callback is scheduled.
        """
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], object]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


__all__ = [
    "ScheduledHandle",
    "TurnScheduler",
    "ManualHandle",
    "ManualScheduler",
    "AsyncioScheduler",
]
