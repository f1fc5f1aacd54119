"""
Animation timeline synthesis.

Every animated tile runs its own periodic clock. The whole map repeats after
the least common multiple of those periods, and the composite can only change
at instants where some visible tile switches frame. Rendering one frame per
interval between consecutive change instants reproduces the animation exactly
with the fewest frames.
"""

import math
from functools import reduce
from typing import Iterable, Sequence

from ..constants import DEFAULT_FRAME_DELAY, MIN_FRAME_DELAY
from ..tiled.gid import decode_gid
from ..tiled.models import AnimatedTile, ResolvedTileset, Tilemap, Tileset


def tile_period(tileset: Tileset, local_id: int) -> int | None:
    """Period of a tile's animation in milliseconds, or None for a static tile."""
    kind = tileset.tile_kind(local_id)
    if isinstance(kind, AnimatedTile):
        return kind.period
    return None


def animated_periods(tilesets: Iterable[Tileset]) -> list[int]:
    """Positive periods of every animated tile across the tilesets (duplicates kept)."""
    periods = []
    for tileset in tilesets:
        for local_id in tileset.animations:
            period = tile_period(tileset, local_id)
            if period is not None and period > 0:
                periods.append(period)
    return periods


def global_period(tilesets: Iterable[Tileset], default_period: int = DEFAULT_FRAME_DELAY) -> int:
    """
    Length of one full loop of all tile animations combined.

    Args:
        tilesets: Tilesets whose animated tiles constrain the loop
        default_period: Returned when no tile has a positive period

    Returns:
        LCM of all positive animation periods, or ``default_period``
    """
    periods = animated_periods(tilesets)
    if not periods:
        return default_period
    return reduce(_lcm, periods)


def select_frame(tileset: Tileset, local_id: int, elapsed_ms: int) -> int:
    """
    Local tile id to draw for ``local_id`` at ``elapsed_ms``.

    Frame ``i`` covers ``[start_i, start_i + duration_i)`` within the period,
    so an exact boundary belongs to the frame that begins there.
    """
    kind = tileset.tile_kind(local_id)
    if not isinstance(kind, AnimatedTile):
        return local_id

    period = kind.period
    if period <= 0:
        return kind.frames[0].tile_id

    t = elapsed_ms % period
    accumulated = 0
    for frame in kind.frames:
        if accumulated <= t < accumulated + frame.duration:
            return frame.tile_id
        accumulated += frame.duration
    return kind.frames[0].tile_id


def resolve_tileset(
    tilesets: Sequence[ResolvedTileset], actual_gid: int
) -> tuple[ResolvedTileset, int] | None:
    """
    Find the tileset owning an actual (flag-free) GID.

    The owner is the tileset with the greatest first GID not above
    ``actual_gid``.

    Returns:
        Tuple of the owning tileset and the local tile id, or None when the GID
        is below every tileset's first GID
    """
    for entry in sorted(tilesets, key=lambda e: e.first_gid, reverse=True):
        if entry.first_gid <= actual_gid:
            return entry, actual_gid - entry.first_gid
    return None


def change_events(
    tilemap: Tilemap,
    tilesets: Sequence[ResolvedTileset],
    layer_grids: Sequence[Sequence[int]],
    period: int,
) -> list[int]:
    """
    Sorted instants in ``[0, period]`` at which the composite may change.

    0 and ``period`` are always included. For every animated tile placed on
    the map, each frame boundary of each repetition of its own cycle within
    the loop is added. Zero-duration frames add no boundary.
    """
    events = {0, period}
    if period <= 0:
        return sorted(events)

    seen: set[tuple[int, int]] = set()
    for grid in layer_grids:
        for gid in grid:
            if gid == 0:
                continue
            actual_gid, _flags = decode_gid(gid)
            owner = resolve_tileset(tilesets, actual_gid)
            if owner is None:
                continue
            entry, local_id = owner
            if (entry.first_gid, local_id) in seen:
                continue
            seen.add((entry.first_gid, local_id))

            kind = entry.tileset.tile_kind(local_id)
            if isinstance(kind, AnimatedTile) and kind.period > 0:
                events.update(_frame_boundaries(kind, period))

    return sorted(events)


def frame_intervals(
    events: Sequence[int], min_delay: int = MIN_FRAME_DELAY
) -> list[tuple[int, int]]:
    """
    Pair each change instant with how long its frame stays on screen.

    Returns:
        ``(start_ms, delay_ms)`` for every consecutive pair of distinct events,
        the delay floored to ``min_delay``
    """
    ordered = sorted(set(events))
    return [
        (start, max(end - start, min_delay))
        for start, end in zip(ordered, ordered[1:])
    ]


def _frame_boundaries(tile: AnimatedTile, period: int) -> Iterable[int]:
    for cycle_start in range(0, period, tile.period):
        running = 0
        for frame in tile.frames:
            if frame.duration == 0:
                continue
            running += frame.duration
            instant = cycle_start + running
            if instant < period:
                yield instant


def _lcm(a: int, b: int) -> int:
    return a * b // math.gcd(a, b)
