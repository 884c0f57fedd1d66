"""Tunable constants for grids, tiles and their timers.

All durations are expressed in the :class:`reward_reveal.timer.Scheduler`
time unit (milliseconds in the preview app). A single frozen
:class:`RevealConfig` is passed to every grid; derive variants with
``dataclasses.replace``.
"""

from dataclasses import dataclass

from reward_reveal.types import ImageSource


DEFAULT_TILE_SIZE = 128
DEFAULT_GAP = 4
DEFAULT_PADDING = 20
DEFAULT_ROWS_PER_GRID = 1
DEFAULT_LIT_CAPACITY = 3
DEFAULT_INITIAL_COLUMNS = 12

DEFAULT_REVEAL_TICK = 5
DEFAULT_HIDE_DELAY = 700
DEFAULT_ROTATION_PERIOD = 850
DEFAULT_UNLOCK_CYCLE = 1500
DEFAULT_UNLOCK_EXAMPLE_COUNT = 24

DEFAULT_FALLBACK_SOURCE: ImageSource = (
    "/assets/collections/pixel_animals/animal_1lb.png"
)
DEFAULT_ASSET_ROOT = "public"


@dataclass(frozen=True)
class RevealConfig:
    """Grid, tile and timing parameters.

    Attributes:
        tile_size: Side of a square tile surface in pixels.
        gap: Spacing between adjacent tiles in pixels.
        padding: Width reserved inside the container (scrollbar, borders).
        rows_per_grid: Number of tile rows each grid shows.
        lit_capacity: Maximum number of simultaneously lit tiles per grid.
        initial_columns: Column count used before the first width observation.
        reveal_tick: Interval between two painted chunks.
        hide_delay: Grace period between deactivation and clearing a tile.
        rotation_period: Interval between two lit-set rotations.
        unlock_cycle: Interval between two unlock example changes.
        unlock_example_count: Number of sampled unlock examples.
        fallback_source: Image used when a tile's own image fails to load.
        asset_root: Directory that image sources are resolved against.
    """

    tile_size: int = DEFAULT_TILE_SIZE
    gap: int = DEFAULT_GAP
    padding: int = DEFAULT_PADDING
    rows_per_grid: int = DEFAULT_ROWS_PER_GRID
    lit_capacity: int = DEFAULT_LIT_CAPACITY
    initial_columns: int = DEFAULT_INITIAL_COLUMNS
    reveal_tick: float = DEFAULT_REVEAL_TICK
    hide_delay: float = DEFAULT_HIDE_DELAY
    rotation_period: float = DEFAULT_ROTATION_PERIOD
    unlock_cycle: float = DEFAULT_UNLOCK_CYCLE
    unlock_example_count: int = DEFAULT_UNLOCK_EXAMPLE_COUNT
    fallback_source: ImageSource = DEFAULT_FALLBACK_SOURCE
    asset_root: str = DEFAULT_ASSET_ROOT

    def validate(self) -> "RevealConfig":
        """Return ``self`` if every field is usable, raise otherwise.

        Raises:
            ValueError: If a size, count or period is out of range.
        """
        if self.tile_size < 2:
            raise ValueError(f"tile_size must be >= 2, got {self.tile_size}")
        if self.gap < 0 or self.padding < 0:
            raise ValueError("gap and padding must be non-negative")
        if self.rows_per_grid < 1 or self.initial_columns < 1:
            raise ValueError("rows_per_grid and initial_columns must be >= 1")
        if self.lit_capacity < 0 or self.unlock_example_count < 0:
            raise ValueError("lit_capacity and unlock_example_count must be >= 0")
        for name in ("reveal_tick", "rotation_period", "unlock_cycle"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.hide_delay < 0:
            raise ValueError("hide_delay must be non-negative")
        return self


DEFAULT_CONFIG = RevealConfig()
