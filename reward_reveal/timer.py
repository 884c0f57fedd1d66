"""Virtual monotonic timer facility.

Every animation in this package is a scheduled continuation rather than a
loop: reveal ticks, hide delays, lit-set rotations and unlock cycling all
register callbacks on a shared :class:`Scheduler`. The scheduler owns a
virtual clock that only moves when :meth:`Scheduler.advance` is called, which
keeps the whole system single-threaded and deterministic under test.

Ordering: callbacks fire by due time; ties fire in scheduling order.
Callbacks may schedule or cancel timers (including themselves) while the
clock is advancing; a timer cancelled before it is due never fires.

Example
-------
>>> from reward_reveal.timer import Scheduler
>>> clock = Scheduler()
>>> fired = []
>>> handle = clock.call_every(10, lambda: fired.append(clock.now))
>>> clock.advance(35)
3
>>> fired
[10.0, 20.0, 30.0]
"""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from reward_reveal.types import TimerCallback, TimerHandle


@dataclass(order=True)
class _Timer:
    due: float
    seq: int
    handle: TimerHandle = field(compare=False)
    callback: TimerCallback = field(compare=False)
    period: Optional[float] = field(default=None, compare=False)


def handle_generator() -> Iterator[TimerHandle]:
    """Yield an infinite sequence of positive timer handles."""
    return itertools.count(1)


class Scheduler:
    """Schedule, cancel and repeat callbacks on a virtual clock."""

    def __init__(self, start: float = 0.0) -> None:
        self._now: float = float(start)
        self._queue: List[_Timer] = []
        self._live: Dict[TimerHandle, _Timer] = {}
        self._handles = handle_generator()
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        """Current virtual time."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of timers that are scheduled and not cancelled."""
        return len(self._live)

    def is_active(self, handle: Optional[TimerHandle]) -> bool:
        return handle is not None and handle in self._live

    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        """Run ``callback`` once, ``delay`` units from now.

        Raises:
            ValueError: If ``delay`` is negative.
        """
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        return self._push(self._now + delay, callback, None)

    def call_every(self, period: float, callback: TimerCallback) -> TimerHandle:
        """Run ``callback`` every ``period`` units, first one period from now.

        Raises:
            ValueError: If ``period`` is not positive.
        """
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        return self._push(self._now + period, callback, period)

    def cancel(self, handle: Optional[TimerHandle]) -> bool:
        """Cancel a timer. Returns True if it was still live."""
        if handle is None:
            return False
        # Heap entry is discarded lazily when it reaches the top.
        return self._live.pop(handle, None) is not None

    def advance(self, delta: float) -> int:
        """Move the clock forward by ``delta`` and fire every due callback.

        Returns:
            int: Number of callbacks fired.
        """
        if delta < 0:
            raise ValueError(f"cannot move the clock backwards ({delta})")
        target = self._now + delta
        fired = 0
        while self._queue and self._queue[0].due <= target:
            timer = heapq.heappop(self._queue)
            if self._live.get(timer.handle) is not timer:
                continue
            self._now = max(self._now, timer.due)
            if timer.period is None:
                del self._live[timer.handle]
            timer.callback()
            fired += 1
            if timer.period is not None and self._live.get(timer.handle) is timer:
                self._reschedule(timer)
        self._now = target
        return fired

    def run_until_idle(self, limit: float) -> int:
        """Advance until no timer is pending or ``limit`` units have passed."""
        deadline = self._now + limit
        fired = 0
        while self._live and self._now < deadline:
            next_due = min(t.due for t in self._live.values())
            if next_due > deadline:
                break
            fired += self.advance(max(0.0, next_due - self._now))
        return fired

    def _push(
        self, due: float, callback: TimerCallback, period: Optional[float]
    ) -> TimerHandle:
        handle = next(self._handles)
        timer = _Timer(due, next(self._seq), handle, callback, period)
        self._live[handle] = timer
        heapq.heappush(self._queue, timer)
        return handle

    def _reschedule(self, timer: _Timer) -> None:
        assert timer.period is not None
        nxt = _Timer(
            timer.due + timer.period,
            next(self._seq),
            timer.handle,
            timer.callback,
            timer.period,
        )
        self._live[timer.handle] = nxt
        heapq.heappush(self._queue, nxt)
