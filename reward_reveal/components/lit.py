"""Lit index set component.

Ordered (oldest first) sequence of tile indices currently switched on in a
grid. The order matters: rotation always retires the first element.
"""

from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from reward_reveal.types import TileIndex


@dataclass(frozen=True)
class LitSet:
    """Bounded FIFO of lit tile indices.

    Attributes:
        order: Lit indices, oldest first. Unique, each in ``[0, domain)``.
        domain: Number of tile slots in the grid.
        capacity: Upper bound on ``len(order)``.
    """

    order: PVector[TileIndex] = pvector()
    domain: int = 0
    capacity: int = 0

    def __contains__(self, index: object) -> bool:
        return index in self.order

    def __len__(self) -> int:
        return len(self.order)

    @property
    def is_full(self) -> bool:
        return len(self.order) >= self.capacity
