"""Timer wiring for a grid's lit set.

:class:`LitRotation` owns exactly one interval timer on the shared
:class:`reward_reveal.timer.Scheduler`. Each tick applies
:func:`reward_reveal.systems.lit.rotate_lit_set` and notifies listeners when
the set actually changed. Reseeding (the grid's sampled items changed) always
replaces the timer so an old rotation can never fire against the new set.
"""

import logging
import random
from typing import Callable, List, Optional

from reward_reveal.components import LitSet
from reward_reveal.config import DEFAULT_LIT_CAPACITY, DEFAULT_ROTATION_PERIOD
from reward_reveal.systems.lit import rotate_lit_set, seed_lit_set
from reward_reveal.timer import Scheduler
from reward_reveal.types import TimerHandle

logger = logging.getLogger(__name__)

LitListener = Callable[[LitSet], None]


class LitRotation:
    lit: LitSet

    def __init__(
        self,
        scheduler: Scheduler,
        rng: random.Random,
        capacity: int = DEFAULT_LIT_CAPACITY,
        period: float = DEFAULT_ROTATION_PERIOD,
    ):
        self.capacity = capacity
        self.period = period
        self.lit = LitSet(capacity=capacity)
        self._scheduler = scheduler
        self._rng = rng
        self._timer: Optional[TimerHandle] = None
        self._listeners: List[LitListener] = []

    @property
    def running(self) -> bool:
        return self._scheduler.is_active(self._timer)

    def subscribe(self, listener: LitListener) -> None:
        self._listeners.append(listener)

    def reseed(self, domain: int) -> LitSet:
        """Pick a fresh lit set over ``domain`` slots and restart the rotation."""
        self.stop()
        self.lit = seed_lit_set(domain, self.capacity, self._rng)
        logger.debug("lit set seeded over %d slots: %s", domain, list(self.lit.order))
        self._notify()
        self._timer = self._scheduler.call_every(self.period, self.tick)
        return self.lit

    def tick(self) -> None:
        rotated = rotate_lit_set(self.lit, self._rng)
        if rotated is self.lit:
            return
        self.lit = rotated
        self._notify()

    def stop(self) -> None:
        self._scheduler.cancel(self._timer)
        self._timer = None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.lit)
