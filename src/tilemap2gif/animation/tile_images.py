"""Tileset atlas loading and per-tile extraction using Pillow."""

import logging
from pathlib import Path

from PIL import Image, ImageChops, UnidentifiedImageError

from ..errors import ResolutionError
from ..tiled.colors import parse_hex_color
from ..tiled.gid import TileFlags
from ..tiled.models import Tileset

logger = logging.getLogger(__name__)

Box = tuple[int, int, int, int]


def load_tileset_image(image_path: str | Path) -> Image.Image:
    """Load an atlas image as RGBA."""
    path = Path(image_path)
    if not path.is_file():
        raise ResolutionError(f"Tileset image file not found: {path}")
    try:
        with Image.open(path) as img:
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        raise ResolutionError(f"Error loading tileset image {path}: {exc}") from exc


def apply_transparency(atlas: Image.Image, trans: str | None) -> Image.Image:
    """
    Return a copy of the atlas where pixels matching ``trans`` are fully transparent.

    The atlas itself is never modified. A missing or unparsable colour returns
    the atlas unchanged (the latter with a warning).
    """
    if not trans:
        return atlas
    try:
        key_r, key_g, key_b, _ = parse_hex_color(trans)
    except ValueError as exc:
        logger.warning("Failed to parse transparency colour: %s", exc)
        return atlas

    processed = atlas.convert("RGBA")
    r, g, b, a = processed.split()
    # 255 where all three channels match the key
    match = ImageChops.multiply(
        ImageChops.multiply(
            r.point(lambda v, key=key_r: 255 if v == key else 0),
            g.point(lambda v, key=key_g: 255 if v == key else 0),
        ),
        b.point(lambda v, key=key_b: 255 if v == key else 0),
    )
    processed.putalpha(ImageChops.subtract(a, match))
    return processed


def tile_source_box(tileset: Tileset, local_id: int) -> Box:
    """Atlas rectangle (left, top, right, bottom) of a local tile id."""
    if tileset.columns <= 0:
        raise ValueError(f"Tileset '{tileset.name}' has no columns")
    column = local_id % tileset.columns
    row = local_id // tileset.columns
    left = tileset.margin + column * (tileset.tile_width + tileset.spacing)
    top = tileset.margin + row * (tileset.tile_height + tileset.spacing)
    return left, top, left + tileset.tile_width, top + tileset.tile_height


def extract_tile(atlas: Image.Image, box: Box) -> Image.Image:
    """
    Crop a tile out of the atlas into a new image.

    The box is clamped to the atlas bounds; a box entirely outside the atlas
    yields a transparent tile of the requested size.
    """
    left, top, right, bottom = box
    clamped = (
        max(0, left),
        max(0, top),
        min(right, atlas.width),
        min(bottom, atlas.height),
    )
    if clamped[2] <= clamped[0] or clamped[3] <= clamped[1]:
        return Image.new("RGBA", (max(0, right - left), max(0, bottom - top)), (0, 0, 0, 0))
    return atlas.crop(clamped)


def transform_tile(tile: Image.Image, flags: TileFlags) -> Image.Image:
    """
    Apply Tiled flip flags and return a new image.

    The diagonal flip (rotate 90 degrees clockwise then mirror horizontally,
    i.e. a transpose) is applied first and swaps the effect of the
    horizontal and vertical flags.
    """
    transformed = tile.copy()
    horizontal, vertical = flags.horizontal, flags.vertical

    if flags.diagonal:
        transformed = transformed.transpose(Image.Transpose.TRANSPOSE)
        horizontal, vertical = vertical, horizontal
    if horizontal:
        transformed = transformed.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    if vertical:
        transformed = transformed.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    return transformed
