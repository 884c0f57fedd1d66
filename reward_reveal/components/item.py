"""Reward catalog components.

``RewardItem`` and ``Collection`` are static configuration: built once when
the catalog is assembled and never mutated afterwards. An item's identity is
its image source; two items with the same source compare equal regardless of
label.
"""

from dataclasses import dataclass, field

from pyrsistent.typing import PVector

from reward_reveal.types import ImageSource, SilhouetteStyle


@dataclass(frozen=True)
class RewardItem:
    """A single unlockable reward.

    Attributes:
        image_source: URI of the reward image; the item's identity.
        label: Human readable label passed through to the tile.
    """

    image_source: ImageSource
    label: str = field(compare=False)


@dataclass(frozen=True)
class Collection:
    """Ordered set of rewards shown together in one grid.

    Attributes:
        id: Stable identifier.
        title: Display title.
        ribbon: Text of the lock ribbon above the grid.
        included: True if the collection is unlocked by default.
        items: Rewards in catalog order.
        silhouette: Backdrop treatment for unrevealed tiles.
    """

    id: str
    title: str
    ribbon: str
    items: PVector[RewardItem]
    silhouette: SilhouetteStyle
    included: bool = False
