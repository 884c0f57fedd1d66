import logging
import os
from typing import Optional

import numpy as np
import numpy.typing as npt
from PIL import Image

from reward_reveal.types import ChunkCoord, ImageLoader, ImageSource, SilhouetteStyle

logger = logging.getLogger(__name__)

# Type aliases for clarity
FloatArray = npt.NDArray[np.float32]
UInt8Array = npt.NDArray[np.uint8]

MASK_RGB = (24, 24, 24)
IMAGE_DIM = 0.35


def resolve_path(source: ImageSource, asset_root: str) -> str:
    """Map a site-absolute source like ``/assets/x.png`` under ``asset_root``."""
    return os.path.join(asset_root, source.lstrip("/"))


def load_image(path: str, size: int) -> Optional[Image.Image]:
    try:
        return Image.open(path).convert("RGBA").resize((size, size))
    except Exception:
        logger.warning("failed to load image %s", path)
        return None


def make_file_loader(asset_root: str) -> ImageLoader:
    """Return an ``ImageLoader`` reading sources from ``asset_root``."""

    def loader(source: ImageSource, size: int) -> Optional[Image.Image]:
        return load_image(resolve_path(source, asset_root), size)

    return loader


def blank_surface(size: int) -> Image.Image:
    return Image.new("RGBA", (size, size), (0, 0, 0, 0))


def scaled_copy(image: Image.Image, size: int) -> Image.Image:
    """
    Fresh scratch surface holding ``image`` drawn at ``size x size``.
    """
    scratch = blank_surface(size)
    src = image if image.size == (size, size) else image.resize((size, size))
    scratch.alpha_composite(src.convert("RGBA"))
    return scratch


def copy_chunk(
    source: Image.Image, target: Image.Image, coord: ChunkCoord, chunk: int
) -> None:
    """Copy one ``chunk x chunk`` square at ``coord`` from ``source`` to ``target``."""
    x, y = coord
    box = (x * chunk, y * chunk, (x + 1) * chunk, (y + 1) * chunk)
    target.paste(source.crop(box), box[:2])


def silhouette(image: Image.Image, style: SilhouetteStyle) -> Image.Image:
    """
    Backdrop shown beneath a tile's reveal surface.

    MASK fills every visible pixel with a flat dark color keeping alpha;
    IMAGE keeps the picture as dimmed grayscale.
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")

    arr: UInt8Array = np.array(image, dtype=np.uint8)
    out: UInt8Array = arr.copy()

    if style == SilhouetteStyle.MASK:
        visible = arr[..., 3] > 0
        for channel, value in enumerate(MASK_RGB):
            out[..., channel][visible] = value
    else:
        rgb: FloatArray = arr[..., :3].astype(np.float32)
        # ITU-R 601 luma
        luma: FloatArray = (
            rgb[..., 0] * 0.299 + rgb[..., 1] * 0.587 + rgb[..., 2] * 0.114
        ) * np.float32(IMAGE_DIM)
        gray: UInt8Array = np.clip(luma, 0, 255).astype(np.uint8)
        out[..., 0] = gray
        out[..., 1] = gray
        out[..., 2] = gray

    return Image.fromarray(out)
