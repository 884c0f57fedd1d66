"""Built-in reward catalog.

Each collection holds one reward per pound lost (1 lb to 100 lb), named by a
fixed pattern ``/assets/collections/{folder}/{prefix}{n}lb.{extension}``.
Instrument collections skip the pound values listed in
:data:`EXCLUDED_INSTRUMENTS`. Pixel collections use the ``MASK`` silhouette,
clay collections the ``IMAGE`` one; only pixel animals is included by default.

The catalog is an immutable vector built once at import time. Pass it (or a
filtered copy) to the grids that render it.
"""

from typing import Iterable, Literal, Optional

from pyrsistent import pvector
from pyrsistent.typing import PVector

from reward_reveal.components import Collection, RewardItem
from reward_reveal.types import SilhouetteStyle

MAX_POUNDS = 100

EXCLUDED_INSTRUMENTS: tuple[int, ...] = (
    18, 27, 34, 38, 44, 47, 49, 52, 54, 55, 56, 59, 60, 61, 64,
    65, 68, 70, 73, 75, 76, 81, 83, 86, 87, 91, 92, 95, 98,
)  # fmt: skip


def build_pound_collection(
    folder: str,
    prefix: str,
    extension: Literal["png", "jpg"],
    label_prefix: str,
    exclude: Iterable[int] = (),
) -> PVector[RewardItem]:
    """One ``RewardItem`` per pound in ``1..MAX_POUNDS`` not in ``exclude``."""
    excluded = set(exclude)
    return pvector(
        RewardItem(
            image_source=f"/assets/collections/{folder}/{prefix}{lbs}lb.{extension}",
            label=f"{label_prefix} {lbs} lb",
        )
        for lbs in range(1, MAX_POUNDS + 1)
        if lbs not in excluded
    )


DEFAULT_CATALOG: PVector[Collection] = pvector(
    [
        Collection(
            id="pixel_animals",
            title="Pixel Animals",
            ribbon="INCLUDED - pixel animals",
            included=True,
            items=build_pound_collection(
                "pixel_animals", "animal_", "png", "Pixel animal"
            ),
            silhouette=SilhouetteStyle.MASK,
        ),
        Collection(
            id="pixel_dogs",
            title="Pixel Dogs",
            ribbon="Unlockable - Pixel Dogs",
            items=build_pound_collection("pixel_dogs", "dog_", "png", "Pixel dog"),
            silhouette=SilhouetteStyle.MASK,
        ),
        Collection(
            id="pixel_objects",
            title="Pixel Objects",
            ribbon="Unlockable - Pixel Objects",
            items=build_pound_collection(
                "pixel_objects", "object_", "png", "Pixel object"
            ),
            silhouette=SilhouetteStyle.MASK,
        ),
        Collection(
            id="pixel_instruments",
            title="Pixel Instruments",
            ribbon="Unlockable - Pixel Instruments",
            items=build_pound_collection(
                "pixel_instruments",
                "instrument_",
                "png",
                "Pixel instrument",
                EXCLUDED_INSTRUMENTS,
            ),
            silhouette=SilhouetteStyle.MASK,
        ),
        Collection(
            id="clay_animals",
            title="Clay Animals",
            ribbon="Unlockable - Clay Animals",
            items=build_pound_collection(
                "clay_animals", "clay_animal_", "jpg", "Clay animal"
            ),
            silhouette=SilhouetteStyle.IMAGE,
        ),
        Collection(
            id="clay_dogs",
            title="Clay Dogs",
            ribbon="Unlockable - Clay Dogs",
            items=build_pound_collection("clay_dogs", "clay_dog_", "jpg", "Clay dog"),
            silhouette=SilhouetteStyle.IMAGE,
        ),
        Collection(
            id="clay_objects",
            title="Clay Objects",
            ribbon="Unlockable - Clay Objects",
            items=build_pound_collection(
                "clay_objects", "clay_object_", "jpg", "Clay object"
            ),
            silhouette=SilhouetteStyle.IMAGE,
        ),
        Collection(
            id="clay_instruments",
            title="Clay Instruments",
            ribbon="Unlockable - Clay Instruments",
            items=build_pound_collection(
                "clay_instruments",
                "clay_instrument_",
                "jpg",
                "Clay instrument",
                EXCLUDED_INSTRUMENTS,
            ),
            silhouette=SilhouetteStyle.IMAGE,
        ),
    ]
)


def find_collection(
    collection_id: str, catalog: PVector[Collection] = DEFAULT_CATALOG
) -> Optional[Collection]:
    return next((c for c in catalog if c.id == collection_id), None)


def collections_with_style(
    style: SilhouetteStyle, catalog: PVector[Collection] = DEFAULT_CATALOG
) -> PVector[Collection]:
    return pvector(c for c in catalog if c.silhouette == style)
