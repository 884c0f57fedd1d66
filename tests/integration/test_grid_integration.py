import random

from pyrsistent import pvector

from reward_reveal.components import Collection
from reward_reveal.config import RevealConfig
from reward_reveal.grid import RewardGrid, visible_count_for
from reward_reveal.timer import Scheduler
from reward_reveal.types import Phase, SilhouetteStyle
from tests.test_utils import FakeLoader, make_collection, make_items

CONFIG = RevealConfig(tile_size=128, gap=4)


def make_grid(n: int = 100, seed: int = 0, **kwargs) -> tuple[RewardGrid, Scheduler]:
    scheduler = Scheduler()
    grid = RewardGrid(
        make_collection(n),
        scheduler,
        config=kwargs.pop("config", CONFIG),
        rng=random.Random(seed),
        loader=FakeLoader(),
        **kwargs,
    )
    return grid, scheduler


def test_end_to_end_width_1000() -> None:
    grid, _ = make_grid(100)
    assert grid.columns == 12
    assert grid.observe_width(1000) is True

    summary = grid.summary()
    assert summary.columns == 7
    assert summary.visible_count == 7
    assert summary.more_count == 93
    sources = [item.image_source for item in grid.sampled]
    assert len(set(sources)) == 7
    assert set(grid.sampled) <= set(grid.collection.items)
    assert len(grid.tiles) == 7
    assert len(summary.lit) == 3
    assert len(set(summary.lit)) == 3
    assert all(0 <= i < 7 for i in summary.lit)


def test_lit_tiles_reveal_and_others_stay_idle() -> None:
    grid, _ = make_grid(100, columns=7)
    for index, tile in enumerate(grid.tiles):
        expected = Phase.REVEALING if index in grid.lit else Phase.IDLE
        assert tile.phase == expected


def test_shuffle_is_stable_across_column_changes() -> None:
    grid, _ = make_grid(100)
    shuffled = grid.shuffled
    first_tiles = list(grid.tiles)

    grid.observe_width(1000)
    assert grid.shuffled is shuffled
    assert grid.tiles == first_tiles[:7]
    assert all(not t.state.mounted for t in first_tiles[7:])

    grid.observe_width(1300)
    assert grid.columns == 9
    assert grid.tiles[:7] == first_tiles[:7]
    assert [t.item for t in grid.tiles] == list(shuffled[:9])


def test_visible_count_change_reseeds_lit_set() -> None:
    grid, _ = make_grid(100)
    assert grid.lit.domain == 12
    grid.observe_width(1000)
    assert grid.lit.domain == 7
    lit_tiles = {i for i, t in enumerate(grid.tiles) if t.state.desired_on}
    assert lit_tiles == set(grid.lit.order)


def test_column_change_without_visible_change_keeps_lit_set() -> None:
    grid, _ = make_grid(5)
    lit = grid.lit
    tiles = list(grid.tiles)
    assert grid.visible_count == 5

    assert grid.set_columns(8) is True
    assert grid.lit is lit
    assert grid.tiles == tiles
    assert grid.set_columns(8) is False


def test_rotation_drops_oldest_lit_tile() -> None:
    grid, scheduler = make_grid(100, columns=7)
    before = list(grid.lit.order)

    scheduler.advance(850)
    after = list(grid.lit.order)

    assert after[:2] == before[1:]
    assert after[2] not in before
    assert grid.tiles[before[0]].phase == Phase.HIDING
    assert grid.tiles[after[2]].phase == Phase.REVEALING


def test_lit_invariants_over_long_run() -> None:
    grid, scheduler = make_grid(100, columns=7)
    for _ in range(60):
        scheduler.advance(425)
        lit = grid.lit.order
        assert len(lit) == 3
        assert len(set(lit)) == 3
        assert all(0 <= i < 7 for i in lit)
        on = {i for i, t in enumerate(grid.tiles) if t.state.desired_on}
        assert on == set(lit)


def test_all_slots_lit_rotation_is_noop() -> None:
    grid, scheduler = make_grid(2)
    lit = grid.lit
    assert sorted(lit.order) == [0, 1]
    scheduler.advance(850 * 4)
    assert grid.lit is lit
    assert all(t.phase == Phase.REVEALED for t in grid.tiles)


def test_narrow_container_still_shows_one_tile() -> None:
    grid, _ = make_grid(100)
    grid.observe_width(0)
    assert grid.columns == 1
    assert grid.visible_count == 1
    assert list(grid.lit.order) == [0]


def test_duplicate_sources_are_sampled_once() -> None:
    items = make_items(5) + make_items(3)
    collection = Collection(
        id="dupes",
        title="Dupes",
        ribbon="Dupes",
        items=pvector(items),
        silhouette=SilhouetteStyle.IMAGE,
    )
    grid = RewardGrid(
        collection, Scheduler(), config=CONFIG, rng=random.Random(1), loader=FakeLoader()
    )
    sources = [i.image_source for i in grid.sampled]
    assert len(sources) == len(set(sources)) == 5


def test_seeded_grids_are_reproducible() -> None:
    a, _ = make_grid(100, seed=11)
    b, _ = make_grid(100, seed=11)
    assert list(a.sampled) == list(b.sampled)
    assert a.lit == b.lit


def test_render_lays_tiles_in_columns() -> None:
    grid, _ = make_grid(100, columns=7)
    assert grid.render().size == (7 * 128 + 6 * 4, 128)

    rows = RewardGrid(
        make_collection(10),
        Scheduler(),
        config=RevealConfig(tile_size=16, gap=2, rows_per_grid=2),
        rng=random.Random(0),
        loader=FakeLoader(),
        columns=3,
    )
    assert rows.visible_count == 6
    assert rows.render().size == (3 * 16 + 2 * 2, 2 * 16 + 2)


def test_teardown_cancels_all_grid_timers() -> None:
    grid, scheduler = make_grid(100, columns=7)
    scheduler.advance(2000)
    assert scheduler.pending > 0
    grid.teardown()
    assert scheduler.pending == 0
    assert grid.observe_width(2000) is False
    scheduler.advance(5000)
    assert scheduler.pending == 0


def test_visible_count_for() -> None:
    assert visible_count_for(100, 7, 1) == 7
    assert visible_count_for(5, 7, 1) == 5
    assert visible_count_for(100, 0, 1) == 1
    assert visible_count_for(100, 4, 2) == 8
    assert visible_count_for(0, 4, 1) == 0
