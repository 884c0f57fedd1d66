"""Tile animation state component.

Snapshot of one tile's reveal state machine::

    IDLE --activate--> REVEALING --last chunk--> REVEALED
    REVEALING/REVEALED --deactivate--> HIDING --hide delay--> IDLE
    HIDING --activate--> REVEALING

Surfaces are not part of the snapshot; they live on the owning
:class:`reward_reveal.renderer.reveal.RevealTile`. Timer handles are, so
the owner can always cancel everything it scheduled.
"""

from dataclasses import dataclass
from typing import Optional

from pyrsistent import PSet, pset, pvector
from pyrsistent.typing import PVector

from reward_reveal.types import ChunkCoord, ImageSource, Phase, TimerHandle


@dataclass(frozen=True)
class TileAnimationState:
    """Reveal state of a single tile.

    Attributes:
        phase: Current animation phase.
        source: Image source the tile was mounted with.
        resolved_source: Source actually displayed (the fallback after a
            load failure), ``None`` if nothing could be loaded.
        fallback_used: True once the fallback has been attempted.
        chunk_order: Shuffled chunk coordinates of the current reveal.
        painted: Number of chunks of ``chunk_order`` already painted.
        reveal_timer: Handle of the recurring reveal tick, if any.
        hide_timer: Handle of the pending clear, if any.
        desired_on: Last observed value of the on/off signal.
        mounted: False once the tile has been torn down.
    """

    phase: Phase = Phase.IDLE
    source: Optional[ImageSource] = None
    resolved_source: Optional[ImageSource] = None
    fallback_used: bool = False
    chunk_order: PVector[ChunkCoord] = pvector()
    painted: int = 0
    reveal_timer: Optional[TimerHandle] = None
    hide_timer: Optional[TimerHandle] = None
    desired_on: bool = False
    mounted: bool = True

    @property
    def pending_timers(self) -> PSet[TimerHandle]:
        return pset(
            handle
            for handle in (self.reveal_timer, self.hide_timer)
            if handle is not None
        )

    @property
    def remaining(self) -> int:
        return len(self.chunk_order) - self.painted
