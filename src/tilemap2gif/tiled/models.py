"""Immutable records describing a loaded Tiled map and its tilesets."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

from PIL import Image


@dataclass(frozen=True)
class AnimationFrame:
    tile_id: int
    duration: int


@dataclass(frozen=True)
class StaticTile:
    """A tile that always displays its own atlas cell."""


@dataclass(frozen=True)
class AnimatedTile:
    """A tile that cycles through other cells of its tileset."""

    tile_id: int
    frames: tuple[AnimationFrame, ...]

    @property
    def period(self) -> int:
        """Time in milliseconds after which the frame sequence repeats."""
        return sum(frame.duration for frame in self.frames)


TileKind = StaticTile | AnimatedTile

STATIC_TILE = StaticTile()


@dataclass(frozen=True)
class TilesetImage:
    source: Path
    width: int | None = None
    height: int | None = None
    trans: str | None = None


@dataclass(frozen=True)
class Tileset:
    """A tileset atlas definition (TSX document or inline ``<tileset>``)."""

    name: str
    tile_width: int
    tile_height: int
    columns: int
    tile_count: int
    image: TilesetImage | None = None
    margin: int = 0
    spacing: int = 0
    animations: Mapping[int, AnimatedTile] = field(default_factory=dict, hash=False)

    def tile_kind(self, local_id: int) -> TileKind:
        """Classify a local tile id as static or animated."""
        animated = self.animations.get(local_id)
        if animated is None or not animated.frames:
            return STATIC_TILE
        return animated

    def with_atlas_width(self, atlas_width: int) -> "Tileset":
        """
        Return the tileset with ``columns`` derived from the atlas width.

        Tilesets that already declare a positive column count are returned as is.
        """
        if self.columns > 0 or atlas_width <= 0:
            return self
        stride = self.tile_width + self.spacing
        columns = max(1, (atlas_width - 2 * self.margin + self.spacing) // stride)
        return replace(self, columns=columns)

    @property
    def transparent_color(self) -> str | None:
        return self.image.trans if self.image else None


@dataclass(frozen=True)
class TilesetRef:
    """A map's reference to a tileset, either external or inline."""

    first_gid: int
    source: str | None = None
    tileset: Tileset | None = None


@dataclass(frozen=True)
class TileLayer:
    name: str
    gids: tuple[int, ...]
    visible: bool = True
    id: int | None = None


@dataclass(frozen=True)
class Tilemap:
    width: int
    height: int
    tile_width: int
    tile_height: int
    layers: tuple[TileLayer, ...] = ()
    tilesets: tuple[TilesetRef, ...] = ()
    background_color: str | None = None
    orientation: str = "orthogonal"
    source_path: Path | None = None

    @property
    def pixel_size(self) -> tuple[int, int]:
        return self.width * self.tile_width, self.height * self.tile_height


@dataclass(frozen=True)
class ResolvedTileset:
    """A tileset bound to its first GID and its loaded atlas image."""

    first_gid: int
    tileset: Tileset
    image: Image.Image = field(compare=False, hash=False)
