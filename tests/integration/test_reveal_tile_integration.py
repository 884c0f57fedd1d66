from reward_reveal.config import RevealConfig
from reward_reveal.types import Phase
from reward_reveal.utils.layout import chunk_coords
from tests.test_utils import RED, FakeLoader, make_tile

# 32px tile: 2px chunks, 16x16 = 256 chunks, one every 5 units.
CHUNKS = 256
FULL_REVEAL = CHUNKS * 5


def test_activate_paints_one_chunk_per_tick() -> None:
    tile, clock, _ = make_tile()
    tile.activate()

    assert tile.phase == Phase.REVEALING
    assert tile.is_blank
    clock.advance(5)
    assert tile.state.painted == 1
    assert not tile.is_blank
    clock.advance(50)
    assert tile.state.painted == 11


def test_full_reveal_paints_every_chunk_exactly_once() -> None:
    tile, clock, _ = make_tile()
    tile.activate()
    assert sorted(tile.state.chunk_order) == sorted(chunk_coords(32))

    clock.advance(FULL_REVEAL - 5)
    assert tile.phase == Phase.REVEALING
    clock.advance(5)
    assert tile.phase == Phase.REVEALED
    assert tile.state.painted == CHUNKS
    assert tile.state.pending_timers == set()
    assert clock.pending == 0
    assert tile.surface.getbbox() == (0, 0, 32, 32)
    assert tile.surface.getpixel((31, 0)) == RED


def test_activate_is_idempotent_while_revealing_and_revealed() -> None:
    tile, clock, _ = make_tile()
    tile.activate()
    clock.advance(100)
    order = tile.state.chunk_order
    timer = tile.state.reveal_timer

    tile.activate()
    assert tile.state.chunk_order is order
    assert tile.state.reveal_timer == timer
    assert tile.state.painted == 20
    assert clock.pending == 1

    clock.advance(FULL_REVEAL)
    tile.activate()
    tile.activate()
    assert tile.phase == Phase.REVEALED
    assert clock.pending == 0
    assert not tile.is_blank


def test_deactivate_stops_painting_then_clears_after_grace_delay() -> None:
    tile, clock, _ = make_tile()
    tile.activate()
    clock.advance(50)
    tile.deactivate()

    assert tile.phase == Phase.HIDING
    assert tile.state.reveal_timer is None
    clock.advance(699)
    assert tile.state.painted == 10
    assert not tile.is_blank
    clock.advance(1)
    assert tile.phase == Phase.IDLE
    assert tile.is_blank
    assert clock.pending == 0


def test_reactivate_within_grace_delay_cancels_pending_clear() -> None:
    tile, clock, _ = make_tile()
    tile.activate()
    clock.advance(FULL_REVEAL)
    tile.deactivate()
    clock.advance(300)
    hide_timer = tile.state.hide_timer

    tile.activate()
    assert not clock.is_active(hide_timer)
    assert tile.phase == Phase.REVEALING
    assert tile.is_blank  # fresh reveal starts from an empty surface

    for _ in range(130):
        clock.advance(10)
        assert tile.phase in (Phase.REVEALING, Phase.REVEALED)
        assert not tile.is_blank
    assert tile.phase == Phase.REVEALED


def test_deactivate_idle_tile_schedules_nothing() -> None:
    tile, clock, _ = make_tile()
    tile.deactivate()
    assert tile.phase == Phase.IDLE
    assert clock.pending == 0


def test_set_on_reacts_to_edges_only() -> None:
    tile, clock, _ = make_tile()
    tile.set_on(False)
    assert clock.pending == 0

    tile.set_on(True)
    clock.advance(20)
    order = tile.state.chunk_order
    tile.set_on(True)
    assert tile.state.chunk_order is order
    assert tile.state.painted == 4

    tile.set_on(False)
    assert tile.phase == Phase.HIDING
    tile.set_on(False)
    assert clock.pending == 1


def test_mounting_lit_tile_starts_reveal() -> None:
    tile, clock, _ = make_tile(on=True)
    assert tile.phase == Phase.REVEALING
    clock.advance(FULL_REVEAL)
    assert tile.phase == Phase.REVEALED


def test_teardown_cancels_every_timer() -> None:
    tile, clock, _ = make_tile()
    tile.activate()
    clock.advance(50)
    tile.teardown()

    assert clock.pending == 0
    assert tile.state.pending_timers == set()
    painted = tile.state.painted
    clock.advance(10_000)
    assert tile.state.painted == painted

    tile.activate()
    tile.deactivate()
    assert clock.pending == 0


def test_teardown_during_hide_delay() -> None:
    tile, clock, _ = make_tile()
    tile.activate()
    clock.advance(FULL_REVEAL)
    tile.deactivate()
    tile.teardown()
    clock.advance(1000)
    assert clock.pending == 0
    assert not tile.is_blank


def test_failed_image_uses_fallback_once() -> None:
    source = "/assets/broken.png"
    loader = FakeLoader(failing={source})
    config = RevealConfig(tile_size=32, fallback_source="/assets/fallback.png")
    tile, clock, _ = make_tile(loader=loader, source=source, config=config)

    assert loader.calls == [source, "/assets/fallback.png"]
    assert tile.state.resolved_source == "/assets/fallback.png"
    assert tile.state.fallback_used

    for _ in range(3):
        tile.set_on(True)
        clock.advance(FULL_REVEAL)
        assert tile.phase == Phase.REVEALED
        tile.set_on(False)
        clock.advance(700)
        assert tile.phase == Phase.IDLE
    assert loader.calls == [source, "/assets/fallback.png"]


def test_failed_fallback_leaves_tile_blank() -> None:
    loader = FakeLoader(failing={"/assets/broken.png", "/assets/fallback.png"})
    config = RevealConfig(tile_size=32, fallback_source="/assets/fallback.png")
    tile, clock, _ = make_tile(
        loader=loader, source="/assets/broken.png", config=config, on=True
    )

    assert loader.calls == ["/assets/broken.png", "/assets/fallback.png"]
    assert tile.state.resolved_source is None
    assert tile.phase == Phase.IDLE
    tile.activate()
    clock.advance(FULL_REVEAL)
    assert tile.is_blank
    assert tile.render().getbbox() is None
    assert clock.pending == 0


def test_failing_fallback_source_is_not_retried() -> None:
    loader = FakeLoader(failing={"/assets/fallback.png"})
    config = RevealConfig(tile_size=32, fallback_source="/assets/fallback.png")
    tile, _, _ = make_tile(loader=loader, source="/assets/fallback.png", config=config)
    assert loader.calls == ["/assets/fallback.png"]
    assert tile.state.resolved_source is None


def test_render_composites_surface_over_backdrop() -> None:
    tile, clock, _ = make_tile()
    assert tile.render().getpixel((0, 0)) == (24, 24, 24, 255)
    tile.activate()
    clock.advance(FULL_REVEAL)
    assert tile.render().getpixel((0, 0)) == RED
    assert tile.render().size == (32, 32)


def test_odd_tile_size_leaves_only_clamped_edge() -> None:
    config = RevealConfig(tile_size=17)
    tile, clock, _ = make_tile(config=config)
    tile.activate()
    clock.advance(64 * 5)
    assert tile.phase == Phase.REVEALED
    assert tile.surface.getbbox() == (0, 0, 16, 16)
