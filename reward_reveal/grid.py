"""Grid composition.

A :class:`RewardGrid` shows a bounded sample of one collection:

1. The collection's items are shuffled once (deduplicated by image source)
   when the grid is built. The order is kept for the grid's lifetime.
2. ``visible_count = min(items, columns * rows_per_grid)`` leading items of
   that shuffle are mounted as :class:`RevealTile` instances.
3. A :class:`LitRotation` keeps up to ``lit_capacity`` of them lit; every lit
   set change is pushed to the tiles as an on/off signal.

Column changes only re-slice the fixed shuffle: tiles in slots that survive
keep their state, and the lit set is reseeded whenever the visible count
changes.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image
from pyrsistent.typing import PVector

from reward_reveal.components import Collection, LitSet, RewardItem
from reward_reveal.config import DEFAULT_CONFIG, RevealConfig
from reward_reveal.renderer.reveal import RevealTile
from reward_reveal.rotation import LitRotation
from reward_reveal.systems.lit import is_lit
from reward_reveal.timer import Scheduler
from reward_reveal.types import ImageLoader, Phase, TileIndex
from reward_reveal.utils.layout import compute_columns
from reward_reveal.utils.shuffle import dedupe_by, shuffle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridSummary:
    """Layout-facing snapshot of a grid.

    Attributes:
        collection_id: Id of the rendered collection.
        title: Collection title.
        ribbon: Lock ribbon text.
        included: Whether the collection is unlocked by default.
        columns: Current column count.
        visible_count: Number of mounted tiles.
        more_count: Items of the collection not shown.
        lit: Lit tile indices, oldest first.
        phases: Animation phase of each mounted tile.
    """

    collection_id: str
    title: str
    ribbon: str
    included: bool
    columns: int
    visible_count: int
    more_count: int
    lit: Tuple[TileIndex, ...]
    phases: Tuple[Phase, ...]


def visible_count_for(total: int, columns: int, rows: int) -> int:
    return min(total, max(1, columns) * rows)


class RewardGrid:
    collection: Collection
    columns: int
    tiles: List[RevealTile]

    def __init__(
        self,
        collection: Collection,
        scheduler: Scheduler,
        config: RevealConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        loader: Optional[ImageLoader] = None,
        columns: Optional[int] = None,
    ):
        self.collection = collection
        self.config = config
        self.columns = max(1, columns if columns is not None else config.initial_columns)
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._loader = loader
        self._mounted = True
        self.shuffled: PVector[RewardItem] = shuffle(
            dedupe_by(collection.items, lambda item: item.image_source), self._rng
        )
        self.tiles = []
        self.rotation = LitRotation(
            scheduler,
            self._rng,
            capacity=config.lit_capacity,
            period=config.rotation_period,
        )
        self.rotation.subscribe(self._apply_lit)
        self._sync_tiles()

    @property
    def visible_count(self) -> int:
        return visible_count_for(
            len(self.shuffled), self.columns, self.config.rows_per_grid
        )

    @property
    def sampled(self) -> PVector[RewardItem]:
        return self.shuffled[: self.visible_count]

    @property
    def more_count(self) -> int:
        return max(0, len(self.collection.items) - self.visible_count)

    @property
    def lit(self) -> LitSet:
        return self.rotation.lit

    def observe_width(self, width: float) -> bool:
        """Recompute columns for a container width. Returns True if they changed."""
        columns = compute_columns(
            width, self.config.tile_size, self.config.gap, self.config.padding
        )
        return self.set_columns(columns)

    def set_columns(self, columns: int) -> bool:
        columns = max(1, columns)
        if not self._mounted or columns == self.columns:
            return False
        before = self.visible_count
        self.columns = columns
        if self.visible_count != before:
            self._sync_tiles()
        return True

    def summary(self) -> GridSummary:
        return GridSummary(
            collection_id=self.collection.id,
            title=self.collection.title,
            ribbon=self.collection.ribbon,
            included=self.collection.included,
            columns=self.columns,
            visible_count=self.visible_count,
            more_count=self.more_count,
            lit=tuple(self.lit.order),
            phases=tuple(tile.phase for tile in self.tiles),
        )

    def render(self) -> Image.Image:
        """Compose mounted tiles row by row, ``columns`` per row."""
        size, gap = self.config.tile_size, self.config.gap
        count = len(self.tiles)
        cols = max(1, min(self.columns, count))
        rows = max(1, -(-count // cols))
        img = Image.new(
            "RGBA", (cols * size + (cols - 1) * gap, rows * size + (rows - 1) * gap)
        )
        for index, tile in enumerate(self.tiles):
            row, col = divmod(index, cols)
            img.alpha_composite(tile.render(), (col * (size + gap), row * (size + gap)))
        return img

    def teardown(self) -> None:
        self.rotation.stop()
        for tile in self.tiles:
            tile.teardown()
        self._mounted = False

    def _sync_tiles(self) -> None:
        target = self.visible_count
        for tile in self.tiles[target:]:
            tile.teardown()
        kept = self.tiles[:target]
        for item in self.sampled[len(kept) :]:
            kept.append(
                RevealTile(
                    item,
                    self._scheduler,
                    style=self.collection.silhouette,
                    config=self.config,
                    rng=self._rng,
                    loader=self._loader,
                )
            )
        self.tiles = kept
        logger.debug(
            "%s: %d tiles over %d columns", self.collection.id, target, self.columns
        )
        self.rotation.reseed(target)

    def _apply_lit(self, lit: LitSet) -> None:
        for index, tile in enumerate(self.tiles):
            tile.set_on(is_lit(lit, index))
