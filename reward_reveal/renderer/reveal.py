import logging
import random
from dataclasses import replace
from typing import Optional

from PIL import Image

from reward_reveal.components import RewardItem, TileAnimationState
from reward_reveal.config import DEFAULT_CONFIG, RevealConfig
from reward_reveal.systems.reveal import (
    begin_hide,
    begin_reveal,
    can_reveal,
    finish_hide,
    paint_next,
    unmount,
)
from reward_reveal.timer import Scheduler
from reward_reveal.types import ImageLoader, ImageSource, Phase, SilhouetteStyle
from reward_reveal.utils.image import (
    blank_surface,
    copy_chunk,
    make_file_loader,
    scaled_copy,
    silhouette,
)
from reward_reveal.utils.layout import chunk_coords, chunk_size

logger = logging.getLogger(__name__)


def resolve_image(
    source: ImageSource,
    fallback: ImageSource,
    size: int,
    loader: ImageLoader,
) -> tuple[Optional[ImageSource], Optional[Image.Image], bool]:
    """
    Load ``source``, falling back to ``fallback`` exactly once.

    Returns (resolved source, image, fallback attempted). Resolved source and
    image are None when neither could be loaded.
    """
    image = loader(source, size)
    if image is not None:
        return source, image, False
    if source == fallback:
        logger.warning("fallback image %s failed to load", source)
        return None, None, True
    logger.warning("image %s failed to load; using fallback %s", source, fallback)
    image = loader(fallback, size)
    if image is None:
        logger.warning("fallback image %s failed to load", fallback)
        return None, None, True
    return fallback, image, True


class RevealTile:
    """
    One grid cell revealing its reward image chunk by chunk.

    The tile owns a transparent ``size x size`` surface drawn over a static
    silhouette backdrop. ``set_on`` feeds it the grid's desired on/off signal;
    only edges of that signal start a reveal or schedule a hide.
    """

    size: int
    item: RewardItem
    style: SilhouetteStyle
    state: TileAnimationState
    surface: Image.Image
    backdrop: Image.Image

    def __init__(
        self,
        item: RewardItem,
        scheduler: Scheduler,
        on: bool = False,
        style: SilhouetteStyle = SilhouetteStyle.MASK,
        config: RevealConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        loader: Optional[ImageLoader] = None,
    ):
        self.item = item
        self.size = config.tile_size
        self.style = style
        self.config = config
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._coords = chunk_coords(self.size)
        self._chunk = chunk_size(self.size)
        self._image: Optional[Image.Image] = None
        self._source: Optional[Image.Image] = None
        self.surface = blank_surface(self.size)
        self.backdrop = blank_surface(self.size)
        self.state = TileAnimationState(source=item.image_source, desired_on=on)
        self._mount(loader or make_file_loader(config.asset_root))

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def label(self) -> str:
        return self.item.label

    @property
    def is_blank(self) -> bool:
        return self.surface.getbbox() is None

    def _mount(self, loader: ImageLoader) -> None:
        resolved, image, fallback_used = resolve_image(
            self.item.image_source, self.config.fallback_source, self.size, loader
        )
        self.state = replace(
            self.state, resolved_source=resolved, fallback_used=fallback_used
        )
        if image is None:
            return
        self._image = image
        self.backdrop = silhouette(scaled_copy(image, self.size), self.style)
        if self.state.desired_on:
            self.activate()

    def set_on(self, on: bool) -> None:
        """Feed the desired on/off signal; react to its edges only."""
        was_on = self.state.desired_on
        self.state = replace(self.state, desired_on=on)
        if on and not was_on:
            self.activate()
        elif was_on and not on:
            self.deactivate()

    def activate(self) -> None:
        """Start a reveal unless one is running or finished."""
        if not can_reveal(self.state):
            return
        assert self._image is not None
        self._scheduler.cancel(self.state.hide_timer)
        self._scheduler.cancel(self.state.reveal_timer)
        self._clear()
        self._source = scaled_copy(self._image, self.size)
        handle = self._scheduler.call_every(self.config.reveal_tick, self._tick)
        self.state = begin_reveal(self.state, self._coords, self._rng, handle)
        logger.debug("reveal started: %s", self.item.image_source)

    def deactivate(self) -> None:
        """Stop revealing now and clear the surface after the hide delay."""
        if not self.state.mounted:
            return
        self._scheduler.cancel(self.state.reveal_timer)
        self._scheduler.cancel(self.state.hide_timer)
        if self.state.phase == Phase.IDLE:
            self.state = replace(self.state, reveal_timer=None, hide_timer=None)
            return
        handle = self._scheduler.call_later(self.config.hide_delay, self._hide)
        self.state = begin_hide(self.state, handle)

    def teardown(self) -> None:
        """Cancel every outstanding timer; the tile is inert afterwards."""
        for handle in self.state.pending_timers:
            self._scheduler.cancel(handle)
        self.state = unmount(self.state)

    def render(self) -> Image.Image:
        frame = self.backdrop.copy()
        frame.alpha_composite(self.surface)
        return frame

    def _tick(self) -> None:
        handle = self.state.reveal_timer
        self.state, coord = paint_next(self.state)
        if coord is not None and self._source is not None:
            copy_chunk(self._source, self.surface, coord, self._chunk)
        if self.state.phase != Phase.REVEALING:
            self._scheduler.cancel(handle)
            self._source = None
            logger.debug("reveal finished: %s", self.item.image_source)

    def _hide(self) -> None:
        self._clear()
        self.state = finish_hide(self.state)

    def _clear(self) -> None:
        self.surface = blank_surface(self.size)
