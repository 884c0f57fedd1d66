"""Responsive grid geometry.

Pure arithmetic for column counts and chunk partitions plus a small observer
that turns a stream of container width notifications into column changes.
Notifications arrive for every layout pass at a shared ancestor, most of
them irrelevant; the observer suppresses those that do not change the count.
"""

import logging
from typing import Callable, List, Optional

from reward_reveal.config import DEFAULT_GAP, DEFAULT_PADDING
from reward_reveal.types import ChunkCoord

logger = logging.getLogger(__name__)

MIN_CHUNK_SIZE = 2
CHUNKS_PER_SIDE = 16

ColumnListener = Callable[[int], None]


def compute_columns(
    container_width: float,
    tile_size: int,
    gap: int = DEFAULT_GAP,
    padding: int = DEFAULT_PADDING,
) -> int:
    """Number of ``tile_size`` columns separated by ``gap`` that fit the container.

    ``max(1, floor((width - padding + gap) / (tile_size + gap)))`` with the
    usable width clamped at zero, so the result is at least 1 for any width.

    Raises:
        ValueError: If ``tile_size`` is not positive or ``gap`` is negative.
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")
    if gap < 0:
        raise ValueError(f"gap must be non-negative, got {gap}")
    usable = max(0.0, container_width - padding)
    return max(1, int((usable + gap) // (tile_size + gap)))


def chunk_size(size: int) -> int:
    """Side of a reveal chunk for a ``size`` pixel tile (never below 2)."""
    return max(MIN_CHUNK_SIZE, size // CHUNKS_PER_SIDE)


def chunk_coords(size: int) -> List[ChunkCoord]:
    """All ``(col, row)`` chunk coordinates of a tile, row-major.

    Raises:
        ValueError: If ``size`` is smaller than one chunk.
    """
    if size < MIN_CHUNK_SIZE:
        raise ValueError(f"tile size must be >= {MIN_CHUNK_SIZE}, got {size}")
    per_side = size // chunk_size(size)
    return [(x, y) for y in range(per_side) for x in range(per_side)]


class ColumnObserver:
    """Track container width and report column count changes.

    Listeners are called with the new count only when it differs from the
    previous one.
    """

    def __init__(
        self,
        tile_size: int,
        gap: int = DEFAULT_GAP,
        padding: int = DEFAULT_PADDING,
        initial_columns: int = 1,
    ) -> None:
        self.tile_size = tile_size
        self.gap = gap
        self.padding = padding
        self.width: Optional[float] = None
        self.columns: int = max(1, initial_columns)
        self._listeners: List[ColumnListener] = []

    def subscribe(self, listener: ColumnListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ColumnListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def observe(self, width: float) -> Optional[int]:
        """Record a width notification; return the new column count if it changed."""
        self.width = width
        columns = compute_columns(width, self.tile_size, self.gap, self.padding)
        if columns == self.columns:
            return None
        logger.debug("columns %d -> %d (width=%s)", self.columns, columns, width)
        self.columns = columns
        for listener in list(self._listeners):
            listener(columns)
        return columns
