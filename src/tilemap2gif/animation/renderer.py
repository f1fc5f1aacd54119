"""Renderer compositing tilemap layers into PIL Images."""

import logging
from typing import Sequence

from PIL import Image

from ..errors import RenderError
from ..tiled.colors import parse_hex_color
from ..tiled.gid import decode_gid
from ..tiled.models import ResolvedTileset, Tilemap
from .tile_images import extract_tile, tile_source_box, transform_tile
from .timeline import resolve_tileset, select_frame

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class TilemapRenderer:
    """Renders the tilemap at a given point of its animation timeline."""

    def __init__(
        self,
        tilemap: Tilemap,
        tilesets: Sequence[ResolvedTileset],
        layer_grids: Sequence[Sequence[int]],
    ):
        """
        Initialize renderer.

        Args:
            tilemap: The map being rendered (grid and cell size, background)
            tilesets: Tilesets bound to their first GID and atlas image
            layer_grids: Decoded GIDs per layer, bottom layer first
        """
        self.tilemap = tilemap
        self.tilesets = tuple(sorted(tilesets, key=lambda e: e.first_gid, reverse=True))
        self.layer_grids = layer_grids
        self.width, self.height = tilemap.pixel_size
        self.background = self._parse_background(tilemap.background_color)
        self._report_unowned_gids()

    def render_frame(self, elapsed_ms: int) -> Image.Image:
        """
        Render every layer as it appears ``elapsed_ms`` into the animation.

        Returns:
            A new RGBA image owned by the caller

        Raises:
            RenderError: If any image operation fails
        """
        try:
            canvas = Image.new("RGBA", (self.width, self.height), self.background or TRANSPARENT)
            for grid in self.layer_grids:
                self._draw_layer(canvas, grid, elapsed_ms)
            return canvas
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Error rendering frame at {elapsed_ms}ms: {e}") from e

    def _draw_layer(self, canvas: Image.Image, grid: Sequence[int], elapsed_ms: int) -> None:
        map_width = self.tilemap.width
        for index, gid in enumerate(grid):
            if gid == 0:
                continue

            actual_gid, flags = decode_gid(gid)
            owner = resolve_tileset(self.tilesets, actual_gid)
            if owner is None:
                continue
            entry, local_id = owner

            tile_id = select_frame(entry.tileset, local_id, elapsed_ms)
            tile = extract_tile(entry.image, tile_source_box(entry.tileset, tile_id))
            if tile.mode != "RGBA":
                tile = tile.convert("RGBA")
            if flags.any:
                tile = transform_tile(tile, flags)

            x = (index % map_width) * self.tilemap.tile_width
            y = (index // map_width) * self.tilemap.tile_height
            if tile.width and tile.height:
                canvas.alpha_composite(tile, dest=(x, y))
            tile.close()

    def _report_unowned_gids(self) -> None:
        # render_frame keeps no state, so unowned GIDs are reported here
        unowned = set()
        for grid in self.layer_grids:
            for gid in grid:
                if gid == 0:
                    continue
                actual_gid, _flags = decode_gid(gid)
                if resolve_tileset(self.tilesets, actual_gid) is None:
                    unowned.add(actual_gid)
        for actual_gid in sorted(unowned):
            logger.warning("GID %d does not belong to any tileset, skipping", actual_gid)

    @staticmethod
    def _parse_background(color: str | None) -> tuple[int, int, int, int] | None:
        if not color:
            return None
        try:
            background = parse_hex_color(color)
        except ValueError as e:
            logger.warning("Failed to parse background colour: %s", e)
            return None
        logger.debug("Applying background colour %s", color)
        return background
