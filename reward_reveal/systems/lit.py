"""Lit-set rotation system.

Pure functions over :class:`reward_reveal.components.LitSet`:

* Seeding picks ``min(capacity, domain)`` distinct slots at random.
* Each rotation retires the oldest lit slot and lights one random unlit
  slot, so exactly one tile changes per tick regardless of grid size.

When every slot is already lit (or nothing is lit at all) a rotation returns
its input unchanged.
"""

import logging
import random
from dataclasses import replace

from reward_reveal.components import LitSet
from reward_reveal.types import TileIndex
from reward_reveal.utils.shuffle import sample_indices

logger = logging.getLogger(__name__)


def seed_lit_set(domain: int, capacity: int, rng: random.Random) -> LitSet:
    """Fresh lit set over ``domain`` slots holding ``min(capacity, domain)`` indices."""
    if capacity < 0:
        raise ValueError(f"capacity must be non-negative, got {capacity}")
    domain = max(0, domain)
    return LitSet(
        order=sample_indices(domain, capacity, rng),
        domain=domain,
        capacity=capacity,
    )


def unlit_indices(lit: LitSet) -> list[TileIndex]:
    """Slots of ``lit.domain`` not currently lit, ascending."""
    on = set(lit.order)
    return [i for i in range(lit.domain) if i not in on]


def rotate_lit_set(lit: LitSet, rng: random.Random) -> LitSet:
    """Retire the oldest lit index and light one random unlit index."""
    if len(lit.order) == 0:
        return lit
    off = unlit_indices(lit)
    if not off:
        logger.debug("all %d slots lit; rotation skipped", lit.domain)
        return lit
    chosen = off[rng.randrange(len(off))]
    kept = lit.order[1:] if lit.is_full else lit.order
    return replace(lit, order=kept.append(chosen))


def is_lit(lit: LitSet, index: TileIndex) -> bool:
    return index in lit
