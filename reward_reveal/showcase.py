"""Catalog-wide composition.

:class:`RewardShowcase` mounts one :class:`reward_reveal.grid.RewardGrid` per
collection on a shared scheduler and fans each container width observation
out to all of them; the width is observed once at a shared ancestor, so every
grid sees every notification. :class:`UnlockCycler` rotates through a random
sample of pixel rewards used as "reward unlocked" examples.
"""

import logging
import random
from typing import Dict, List, Optional

from PIL import Image
from pyrsistent import pvector
from pyrsistent.typing import PVector

from reward_reveal.catalog import DEFAULT_CATALOG, collections_with_style
from reward_reveal.components import Collection, RewardItem
from reward_reveal.config import DEFAULT_CONFIG, RevealConfig
from reward_reveal.grid import GridSummary, RewardGrid
from reward_reveal.timer import Scheduler
from reward_reveal.types import ImageLoader, SilhouetteStyle, TimerHandle
from reward_reveal.utils.layout import ColumnObserver

logger = logging.getLogger(__name__)


def sample_unlock_examples(
    catalog: PVector[Collection], count: int, rng: random.Random
) -> PVector[RewardItem]:
    """``count`` random rewards, each from a random ``MASK`` collection."""
    pool = [c for c in collections_with_style(SilhouetteStyle.MASK, catalog) if c.items]
    if not pool:
        return pvector()
    examples: List[RewardItem] = []
    for _ in range(count):
        collection = pool[rng.randrange(len(pool))]
        examples.append(collection.items[rng.randrange(len(collection.items))])
    return pvector(examples)


class UnlockCycler:
    """Cycle an active index through a fixed list of unlock examples."""

    def __init__(
        self,
        examples: PVector[RewardItem],
        scheduler: Scheduler,
        period: float = DEFAULT_CONFIG.unlock_cycle,
    ):
        self.examples = examples
        self.active = 0
        self._scheduler = scheduler
        self._timer: Optional[TimerHandle] = None
        if examples:
            self._timer = scheduler.call_every(period, self._next)

    @property
    def current(self) -> Optional[RewardItem]:
        if not self.examples:
            return None
        return self.examples[self.active]

    def stop(self) -> None:
        self._scheduler.cancel(self._timer)
        self._timer = None

    def _next(self) -> None:
        self.active = (self.active + 1) % len(self.examples)


class RewardShowcase:
    grids: List[RewardGrid]

    def __init__(
        self,
        catalog: PVector[Collection] = DEFAULT_CATALOG,
        config: RevealConfig = DEFAULT_CONFIG,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        loader: Optional[ImageLoader] = None,
    ):
        self.config = config.validate()
        self.scheduler = scheduler or Scheduler()
        self._rng = rng or random.Random()
        self.observer = ColumnObserver(
            config.tile_size,
            config.gap,
            config.padding,
            initial_columns=config.initial_columns,
        )
        self.grids = [
            RewardGrid(
                collection,
                self.scheduler,
                config=config,
                rng=self._rng,
                loader=loader,
            )
            for collection in catalog
        ]
        self.observer.subscribe(self._on_columns)
        self.unlock = UnlockCycler(
            sample_unlock_examples(catalog, config.unlock_example_count, self._rng),
            self.scheduler,
            config.unlock_cycle,
        )

    @property
    def columns(self) -> int:
        return self.observer.columns

    def observe_width(self, width: float) -> Optional[int]:
        """Shared container width notification. Returns new columns if changed."""
        return self.observer.observe(width)

    def advance(self, delta: float) -> int:
        return self.scheduler.advance(delta)

    def grid(self, collection_id: str) -> Optional[RewardGrid]:
        return next(
            (g for g in self.grids if g.collection.id == collection_id), None
        )

    def summaries(self) -> Dict[str, GridSummary]:
        return {g.collection.id: g.summary() for g in self.grids}

    def render(self) -> Image.Image:
        """All grids stacked vertically, separated by ``gap``."""
        frames = [g.render() for g in self.grids]
        if not frames:
            return Image.new("RGBA", (1, 1))
        gap = self.config.gap
        width = max(f.width for f in frames)
        height = sum(f.height for f in frames) + gap * (len(frames) - 1)
        img = Image.new("RGBA", (width, height))
        y = 0
        for frame in frames:
            img.alpha_composite(frame, (0, y))
            y += frame.height + gap
        return img

    def teardown(self) -> None:
        self.unlock.stop()
        for grid in self.grids:
            grid.teardown()
        self.observer.unsubscribe(self._on_columns)
        logger.debug("showcase torn down; %d timers left", self.scheduler.pending)

    def _on_columns(self, columns: int) -> None:
        for grid in self.grids:
            grid.set_columns(columns)
