"""Reveal state machine transitions.

Pure transitions over :class:`reward_reveal.components.TileAnimationState`.
They decide *what* the tile should do next; the owning
:class:`reward_reveal.renderer.reveal.RevealTile` performs the side effects
(painting, clearing, scheduling and cancelling timers) and stores the
returned state.

Guards:

* ``begin_reveal`` is only valid from ``IDLE`` or ``HIDING``.
* ``paint_next`` is only valid while ``REVEALING`` with chunks remaining.
* ``begin_hide`` is valid from any phase except ``IDLE``.
"""

import random
from dataclasses import replace
from pyrsistent import pvector
from typing import Optional, Sequence, Tuple

from reward_reveal.components import TileAnimationState
from reward_reveal.types import ChunkCoord, Phase, TimerHandle
from reward_reveal.utils.shuffle import shuffle


def can_reveal(state: TileAnimationState) -> bool:
    """True if an ``activate`` should (re)start the reveal animation."""
    return (
        state.mounted
        and state.resolved_source is not None
        and state.phase in (Phase.IDLE, Phase.HIDING)
    )


def begin_reveal(
    state: TileAnimationState,
    coords: Sequence[ChunkCoord],
    rng: random.Random,
    reveal_timer: TimerHandle,
) -> TileAnimationState:
    """Enter ``REVEALING`` with a fresh random chunk order.

    Raises:
        ValueError: If the tile is not in a phase a reveal can start from.
    """
    if state.phase not in (Phase.IDLE, Phase.HIDING):
        raise ValueError(f"cannot start a reveal from {state.phase}")
    return replace(
        state,
        phase=Phase.REVEALING,
        chunk_order=shuffle(coords, rng),
        painted=0,
        reveal_timer=reveal_timer,
        hide_timer=None,
    )


def paint_next(
    state: TileAnimationState,
) -> Tuple[TileAnimationState, Optional[ChunkCoord]]:
    """Consume the next chunk of the reveal.

    Returns:
        Tuple of the new state and the chunk to paint. When the consumed
        chunk is the last one the phase becomes ``REVEALED`` and the reveal
        timer is dropped from the state (the caller cancels it). If nothing
        remains the chunk is ``None``.
    """
    if state.phase != Phase.REVEALING or state.remaining <= 0:
        return state, None
    coord = state.chunk_order[state.painted]
    painted = state.painted + 1
    if painted >= len(state.chunk_order):
        return (
            replace(state, painted=painted, phase=Phase.REVEALED, reveal_timer=None),
            coord,
        )
    return replace(state, painted=painted), coord


def begin_hide(
    state: TileAnimationState, hide_timer: TimerHandle
) -> TileAnimationState:
    """Enter ``HIDING``; the reveal tick (if any) is stopped."""
    if state.phase == Phase.IDLE:
        raise ValueError("cannot hide an idle tile")
    return replace(state, phase=Phase.HIDING, reveal_timer=None, hide_timer=hide_timer)


def finish_hide(state: TileAnimationState) -> TileAnimationState:
    """Surface cleared: back to ``IDLE`` with no pending work."""
    return replace(
        state,
        phase=Phase.IDLE,
        chunk_order=pvector(),
        painted=0,
        reveal_timer=None,
        hide_timer=None,
    )


def unmount(state: TileAnimationState) -> TileAnimationState:
    """Torn down: no timers, no further transitions."""
    return replace(state, mounted=False, reveal_timer=None, hide_timer=None)
