"""Animator turning a tilemap into a minimal list of timed frames."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from PIL import Image

from ..constants import DEFAULT_FRAME_DELAY, DEFAULT_WORKERS, MIN_FRAME_DELAY
from ..tiled.models import ResolvedTileset, Tilemap
from .renderer import TilemapRenderer
from .timeline import animated_periods, change_events, frame_intervals, global_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FramePlan:
    start_ms: int
    delay_ms: int


@dataclass
class RenderedAnimation:
    """Composited frames and their on-screen durations, index-aligned."""

    frames: list[Image.Image]
    delays: list[int]

    @property
    def total_duration(self) -> int:
        return sum(self.delays)

    def close(self) -> None:
        for frame in self.frames:
            frame.close()


class TilemapAnimator:
    """Generates one seamless loop of a tilemap's tile animations."""

    def __init__(
        self,
        tilemap: Tilemap,
        tilesets: Sequence[ResolvedTileset],
        layer_grids: Sequence[Sequence[int]] | None = None,
        frame_delay: int = DEFAULT_FRAME_DELAY,
        min_frame_delay: int = MIN_FRAME_DELAY,
        workers: int = DEFAULT_WORKERS,
    ):
        """
        Initialize animator.

        Args:
            tilemap: The map to animate
            tilesets: Tilesets bound to their first GID and atlas image
            layer_grids: Decoded GIDs per layer; defaults to the map's visible layers
            frame_delay: Delay of the single frame emitted for a map without animation
            min_frame_delay: Floor applied to every frame delay
            workers: Threads used to render frames; 1 renders sequentially
        """
        if frame_delay <= 0:
            raise ValueError("Frame delay must be greater than 0")
        if workers <= 0:
            raise ValueError("Workers must be greater than 0")

        self.tilemap = tilemap
        self.tilesets = tuple(tilesets)
        if layer_grids is None:
            layer_grids = [layer.gids for layer in tilemap.layers if layer.visible]
        self.layer_grids = layer_grids
        self.frame_delay = frame_delay
        self.min_frame_delay = min_frame_delay
        self.workers = workers
        self.renderer = TilemapRenderer(tilemap, self.tilesets, self.layer_grids)

    @property
    def is_animated(self) -> bool:
        return bool(animated_periods(entry.tileset for entry in self.tilesets))

    def plan(self) -> list[FramePlan]:
        """Compute the start time and delay of every frame in one loop."""
        period = global_period(
            (entry.tileset for entry in self.tilesets), default_period=self.frame_delay
        )
        if not self.is_animated:
            logger.debug("No animated tiles found, emitting a single frame")
            return [FramePlan(0, self.frame_delay)]

        events = change_events(self.tilemap, self.tilesets, self.layer_grids, period)
        intervals = frame_intervals(events, self.min_frame_delay)
        logger.debug(
            "Loop period %dms with %d change events -> %d frames",
            period, len(events), len(intervals),
        )
        if not intervals:
            logger.warning("No frame intervals for a %dms loop, emitting a single frame", period)
            return [FramePlan(0, max(period, self.min_frame_delay))]
        return [FramePlan(start, delay) for start, delay in intervals]

    def generate(self) -> RenderedAnimation:
        """Render every planned frame."""
        plans = self.plan()
        starts = [plan.start_ms for plan in plans]

        if self.workers > 1 and len(plans) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                frames = list(executor.map(self.renderer.render_frame, starts))
        else:
            frames = [self.renderer.render_frame(start) for start in starts]

        return RenderedAnimation(frames=frames, delays=[plan.delay_ms for plan in plans])
