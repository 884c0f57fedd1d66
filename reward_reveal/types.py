"""Common type aliases and enumerations.

``ImageLoader`` and ``TimerCallback`` are the two extension points through
which the core talks to its collaborators: decoded images come in through a
loader, time comes in through the :class:`reward_reveal.timer.Scheduler`.
"""

from enum import StrEnum, auto
from typing import Callable, Optional, Tuple, TYPE_CHECKING


if TYPE_CHECKING:
    from PIL import Image

TileIndex = int
TimerHandle = int
ImageSource = str

# (col, row) position of a chunk inside a tile surface
ChunkCoord = Tuple[int, int]

TimerCallback = Callable[[], None]
ImageLoader = Callable[[ImageSource, int], Optional["Image.Image"]]


class Phase(StrEnum):
    """Reveal animation phases of a single tile."""

    IDLE = auto()
    REVEALING = auto()
    REVEALED = auto()
    HIDING = auto()


class SilhouetteStyle(StrEnum):
    """Visual treatment of a tile's unrevealed backdrop."""

    MASK = auto()
    IMAGE = auto()
