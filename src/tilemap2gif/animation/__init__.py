"""Animation timeline engine and frame rendering."""

from .animator import FramePlan, RenderedAnimation, TilemapAnimator
from .renderer import TilemapRenderer
from .timeline import (
    change_events,
    frame_intervals,
    global_period,
    resolve_tileset,
    select_frame,
    tile_period,
)

__all__ = [
    "FramePlan",
    "RenderedAnimation",
    "TilemapAnimator",
    "TilemapRenderer",
    "change_events",
    "frame_intervals",
    "global_period",
    "resolve_tileset",
    "select_frame",
    "tile_period",
]
