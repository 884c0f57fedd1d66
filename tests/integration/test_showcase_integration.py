import random

from pyrsistent import pvector

from reward_reveal.catalog import DEFAULT_CATALOG
from reward_reveal.config import RevealConfig
from reward_reveal.showcase import RewardShowcase, UnlockCycler, sample_unlock_examples
from reward_reveal.timer import Scheduler
from reward_reveal.types import SilhouetteStyle
from tests.test_utils import FakeLoader, make_collection, make_items

CONFIG = RevealConfig(tile_size=32, gap=4, unlock_example_count=5)


def make_showcase(seed: int = 0) -> RewardShowcase:
    catalog = pvector(
        [
            make_collection(10, "pixel", SilhouetteStyle.MASK, included=True),
            make_collection(20, "clay", SilhouetteStyle.IMAGE),
        ]
    )
    return RewardShowcase(
        catalog, config=CONFIG, rng=random.Random(seed), loader=FakeLoader()
    )


def test_width_observation_fans_out_to_every_grid() -> None:
    showcase = make_showcase()
    # (400 - 20 + 4) // 36 = 10
    assert showcase.observe_width(400) == 10
    assert showcase.observe_width(401) is None

    summaries = showcase.summaries()
    assert summaries["pixel"].visible_count == 10
    assert summaries["pixel"].more_count == 0
    assert summaries["clay"].visible_count == 10
    assert summaries["clay"].more_count == 10
    assert summaries["pixel"].included
    assert showcase.columns == 10

    showcase.observe_width(100)
    assert {s.columns for s in showcase.summaries().values()} == {2}


def test_grids_animate_independently_on_shared_clock() -> None:
    showcase = make_showcase()
    showcase.advance(850 * 3)
    for grid in showcase.grids:
        assert len(grid.lit) == 3
    assert showcase.grid("clay") is not None
    assert showcase.grid("missing") is None


def test_unlock_examples_come_from_mask_collections() -> None:
    showcase = make_showcase()
    examples = showcase.unlock.examples
    assert len(examples) == 5
    pixel_sources = {i.image_source for i in showcase.grid("pixel").collection.items}
    assert all(e.image_source in pixel_sources for e in examples)


def test_unlock_cycler_advances_and_wraps() -> None:
    scheduler = Scheduler()
    examples = pvector(make_items(3))
    cycler = UnlockCycler(examples, scheduler, period=1500)
    assert cycler.current == examples[0]
    scheduler.advance(1500)
    assert cycler.active == 1
    scheduler.advance(3000)
    assert cycler.active == 0
    cycler.stop()
    assert scheduler.pending == 0


def test_unlock_cycler_without_examples_schedules_nothing() -> None:
    scheduler = Scheduler()
    cycler = UnlockCycler(pvector(), scheduler)
    assert cycler.current is None
    assert scheduler.pending == 0


def test_sample_unlock_examples_from_default_catalog() -> None:
    examples = sample_unlock_examples(DEFAULT_CATALOG, 24, random.Random(3))
    assert len(examples) == 24
    assert all("/pixel_" in e.image_source for e in examples)


def test_render_stacks_grids() -> None:
    showcase = make_showcase()
    showcase.observe_width(400)
    frame = showcase.render()
    assert frame.size == (10 * 32 + 9 * 4, 32 * 2 + 4)


def test_teardown_leaves_no_timers() -> None:
    showcase = make_showcase()
    showcase.advance(1000)
    showcase.teardown()
    assert showcase.scheduler.pending == 0
    assert showcase.observe_width(2000) is not None
    assert showcase.scheduler.pending == 0
