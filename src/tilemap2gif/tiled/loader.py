"""Parsing of TMX map and TSX tileset documents."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from ..errors import DecodeError, ResolutionError
from .layer_data import decode_layer_data
from .models import (
    AnimatedTile,
    AnimationFrame,
    Tilemap,
    TileLayer,
    Tileset,
    TilesetImage,
    TilesetRef,
)

logger = logging.getLogger(__name__)


def load_tilemap(tmx_path: str | Path) -> Tilemap:
    """
    Load a TMX document with all of its tile layers decoded.

    External tilesets are only referenced (see ``TilesetRef.source``); inline
    tilesets are parsed in place with image paths resolved against the TMX.

    Raises:
        ResolutionError: If the file does not exist
        DecodeError: If the document or one of its layers cannot be decoded
    """
    path = Path(tmx_path)
    root = _parse_document(path, "map")

    orientation = root.get("orientation", "orthogonal")
    if orientation != "orthogonal":
        raise DecodeError(f"Unsupported map orientation '{orientation}' in {path}")
    if root.get("infinite") == "1":
        raise DecodeError(f"Infinite maps are not supported: {path}")

    width = _int_attr(root, "width", path)
    height = _int_attr(root, "height", path)

    tilesets = tuple(
        _parse_tileset_ref(elem, path) for elem in root.findall("tileset")
    )
    layers = tuple(
        _parse_layer(elem, width * height, path) for elem in root.iter("layer")
    )

    return Tilemap(
        width=width,
        height=height,
        tile_width=_int_attr(root, "tilewidth", path),
        tile_height=_int_attr(root, "tileheight", path),
        layers=layers,
        tilesets=tilesets,
        background_color=root.get("backgroundcolor"),
        orientation=orientation,
        source_path=path,
    )


def load_tileset(tsx_path: str | Path) -> Tileset:
    """Load a TSX document; its image path is resolved against the TSX."""
    path = Path(tsx_path)
    root = _parse_document(path, "tileset")
    return parse_tileset_element(root, path.parent, path)


def parse_tileset_element(elem: ET.Element, base_dir: Path, origin: Path) -> Tileset:
    """
    Build a Tileset from a ``<tileset>`` element.

    Args:
        elem: The ``<tileset>`` element (TSX root or inline in a TMX)
        base_dir: Directory relative image paths are resolved against
        origin: File the element came from, used in error messages
    """
    image = None
    image_elem = elem.find("image")
    if image_elem is not None and image_elem.get("source"):
        image = TilesetImage(
            source=resolve_image_path(base_dir, image_elem.get("source", "")),
            width=_optional_int(image_elem, "width", origin),
            height=_optional_int(image_elem, "height", origin),
            trans=image_elem.get("trans"),
        )

    tile_width = _int_attr(elem, "tilewidth", origin)
    tile_height = _int_attr(elem, "tileheight", origin)
    margin = _optional_int(elem, "margin", origin) or 0
    spacing = _optional_int(elem, "spacing", origin) or 0
    tileset = Tileset(
        name=elem.get("name", ""),
        tile_width=tile_width,
        tile_height=tile_height,
        columns=_optional_int(elem, "columns", origin) or 0,
        tile_count=_optional_int(elem, "tilecount", origin) or 0,
        image=image,
        margin=margin,
        spacing=spacing,
        animations=_parse_animations(elem, origin),
    )
    if image is not None and image.width:
        tileset = tileset.with_atlas_width(image.width)
    return tileset


def resolve_image_path(base_dir: Path, image_source: str) -> Path:
    """Resolve an image path relative to the document that references it."""
    if not image_source:
        raise ValueError("Image path cannot be empty")
    image_path = Path(image_source)
    if image_path.is_absolute():
        return image_path
    return (base_dir / image_path).resolve()


def _parse_document(path: Path, expected_root: str) -> ET.Element:
    if not path.is_file():
        raise ResolutionError(f"{expected_root.upper()} file not found: {path}")
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise DecodeError(f"Malformed XML in {path}: {exc}") from exc
    except OSError as exc:
        raise ResolutionError(f"Could not read {path}: {exc}") from exc
    if root.tag != expected_root:
        raise DecodeError(f"Expected <{expected_root}> root element in {path}, found <{root.tag}>")
    return root


def _parse_tileset_ref(elem: ET.Element, tmx_path: Path) -> TilesetRef:
    first_gid = _int_attr(elem, "firstgid", tmx_path)
    source = elem.get("source")
    if source:
        return TilesetRef(first_gid=first_gid, source=source)
    return TilesetRef(
        first_gid=first_gid,
        tileset=parse_tileset_element(elem, tmx_path.parent, tmx_path),
    )


def _parse_layer(elem: ET.Element, cell_count: int, tmx_path: Path) -> TileLayer:
    name = elem.get("name", "")
    data_elem = elem.find("data")
    if data_elem is None:
        raise DecodeError(f"Layer '{name}' in {tmx_path} has no <data> element")
    if data_elem.find("chunk") is not None:
        raise DecodeError(f"Layer '{name}' in {tmx_path} uses chunked data (infinite maps are not supported)")

    encoding = data_elem.get("encoding")
    try:
        if encoding is None:
            # Legacy XML form: one <tile gid="..."/> per cell
            gids = tuple(int(tile.get("gid", "0")) for tile in data_elem.findall("tile"))
        else:
            gids = decode_layer_data(data_elem.text, encoding, data_elem.get("compression"))
    except (DecodeError, ValueError) as exc:
        raise DecodeError(f"Error decoding layer '{name}' in {tmx_path}: {exc}") from exc

    if len(gids) != cell_count:
        raise DecodeError(
            f"Layer '{name}' in {tmx_path} has {len(gids)} cells, expected {cell_count}"
        )

    return TileLayer(
        name=name,
        gids=gids,
        visible=elem.get("visible", "1") != "0",
        id=_optional_int(elem, "id", tmx_path),
    )


def _parse_animations(elem: ET.Element, origin: Path) -> dict[int, AnimatedTile]:
    animations: dict[int, AnimatedTile] = {}
    for tile_elem in elem.findall("tile"):
        animation_elem = tile_elem.find("animation")
        if animation_elem is None:
            continue
        tile_id = _int_attr(tile_elem, "id", origin)
        frames = tuple(
            AnimationFrame(
                tile_id=_int_attr(frame, "tileid", origin),
                duration=_int_attr(frame, "duration", origin),
            )
            for frame in animation_elem.findall("frame")
        )
        if not frames:
            logger.debug("Tile %d in %s has an empty animation, treating it as static", tile_id, origin)
            continue
        if any(frame.duration < 0 for frame in frames):
            raise DecodeError(f"Tile {tile_id} in {origin} has a negative frame duration")
        animations[tile_id] = AnimatedTile(tile_id=tile_id, frames=frames)
    return animations


def _int_attr(elem: ET.Element, name: str, origin: Path) -> int:
    value = _optional_int(elem, name, origin)
    if value is None:
        raise DecodeError(f"<{elem.tag}> in {origin} is missing required attribute '{name}'")
    return value


def _optional_int(elem: ET.Element, name: str, origin: Path) -> int | None:
    raw = elem.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise DecodeError(f"Attribute '{name}' of <{elem.tag}> in {origin} is not an integer: '{raw}'") from None
