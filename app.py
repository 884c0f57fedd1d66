import random
from dataclasses import dataclass, replace
from typing import Optional

import streamlit as st

from reward_reveal.catalog import DEFAULT_CATALOG
from reward_reveal.config import DEFAULT_CONFIG, RevealConfig
from reward_reveal.showcase import RewardShowcase
from reward_reveal.utils.image import make_file_loader

st.set_page_config(layout="wide", page_title="Reward Reveal")
st.markdown(
    """
    <style>
        header, footer, #MainMenu { visibility: hidden; }
        .stMainBlockContainer {
            padding-top: 0;
            padding-bottom: 0;
        }
    </style>
""",
    unsafe_allow_html=True,
)


@dataclass(frozen=True)
class PreviewConfig:
    container_width: int
    tile_size: int
    step: int
    asset_root: str
    seed: Optional[int]


def set_default_config() -> None:
    if "preview_config" not in st.session_state:
        st.session_state["preview_config"] = PreviewConfig(
            container_width=1000,
            tile_size=DEFAULT_CONFIG.tile_size,
            step=100,
            asset_root=DEFAULT_CONFIG.asset_root,
            seed=None,
        )


def get_config_from_widgets() -> PreviewConfig:
    preview_config: PreviewConfig = st.session_state["preview_config"]

    st.subheader("Layout")
    container_width: int = st.slider(
        "Container width", 100, 2400, preview_config.container_width, key="width"
    )
    tile_size: int = st.select_slider(
        "Tile size", [32, 64, 96, 128, 160], preview_config.tile_size, key="tile"
    )

    st.subheader("Playback")
    step: int = st.slider(
        "Advance per frame (ms)", 5, 2000, preview_config.step, key="step"
    )
    asset_root: str = st.text_input(
        "Asset root", preview_config.asset_root, key="asset_root"
    )
    seed_text: str = st.text_input(
        "Seed (blank for random)",
        "" if preview_config.seed is None else str(preview_config.seed),
        key="seed",
    )
    seed = int(seed_text) if seed_text.strip().lstrip("-").isdigit() else None

    return PreviewConfig(
        container_width=container_width,
        tile_size=tile_size,
        step=step,
        asset_root=asset_root,
        seed=seed,
    )


def make_showcase(preview_config: PreviewConfig) -> None:
    if "showcase" in st.session_state:
        st.session_state["showcase"].teardown()
    config: RevealConfig = replace(
        DEFAULT_CONFIG,
        tile_size=preview_config.tile_size,
        asset_root=preview_config.asset_root,
    )
    showcase = RewardShowcase(
        DEFAULT_CATALOG,
        config=config,
        rng=random.Random(preview_config.seed),
        loader=make_file_loader(preview_config.asset_root),
    )
    showcase.observe_width(preview_config.container_width)
    st.session_state["showcase"] = showcase


# --------- Main App ---------

set_default_config()

with st.sidebar:
    preview_config = get_config_from_widgets()
    if st.button("Rebuild", key="rebuild_btn", use_container_width=True):
        st.session_state["preview_config"] = preview_config
        make_showcase(preview_config)

if "showcase" not in st.session_state:
    make_showcase(st.session_state["preview_config"])

showcase: RewardShowcase = st.session_state["showcase"]
showcase.observe_width(preview_config.container_width)

if st.button("▶ Advance", key="advance_btn"):
    showcase.advance(preview_config.step)

st.caption(f"t = {showcase.scheduler.now:.0f} ms · {showcase.columns} columns")

unlocked = showcase.unlock.current
if unlocked is not None:
    st.markdown(f"**Reward unlocked:** {unlocked.label}")

for grid in showcase.grids:
    summary = grid.summary()
    lock = "🔓" if summary.included else "🔒"
    st.markdown(f"{lock} **{summary.ribbon}** · + {summary.more_count} more")
    st.image(grid.render())
