"""Randomized ordering helpers.

Every random decision in the package (chunk order, item sampling, lit-set
seeding) goes through these functions with an explicit ``random.Random`` so
tests can pin the outcome with a seeded generator.
"""

import random
from typing import Callable, Hashable, Iterable, List, Sequence, TypeVar

from pyrsistent import pvector
from pyrsistent.typing import PVector

T = TypeVar("T")


def shuffle(items: Iterable[T], rng: random.Random) -> PVector[T]:
    """Return a uniformly random permutation of ``items`` (Fisher–Yates).

    The input is not modified.
    """
    out: List[T] = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return pvector(out)


def sample_indices(n: int, k: int, rng: random.Random) -> PVector[int]:
    """Draw ``min(k, n)`` distinct indices from ``range(n)`` without replacement."""
    if n <= 0 or k <= 0:
        return pvector()
    return shuffle(range(n), rng)[: min(k, n)]


def dedupe_by(items: Sequence[T], key: Callable[[T], Hashable]) -> PVector[T]:
    """Drop later duplicates of ``items`` (by ``key``), keeping order."""
    seen: set[Hashable] = set()
    out: List[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        out.append(item)
    return pvector(out)
