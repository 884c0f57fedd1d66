"""reward_reveal.components
=================================

Immutable value objects shared by the systems, renderer and grid layers:
catalog entries (:class:`RewardItem`, :class:`Collection`), the per-grid
:class:`LitSet` and the per-tile :class:`TileAnimationState`.

State changes are expressed by building new instances (``dataclasses.replace``),
never by mutation::

    from reward_reveal.components import LitSet, TileAnimationState
"""

from .item import Collection, RewardItem
from .lit import LitSet
from .tile import TileAnimationState

__all__ = [
    "Collection",
    "LitSet",
    "RewardItem",
    "TileAnimationState",
]
