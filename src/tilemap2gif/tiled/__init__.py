"""Tiled TMX/TSX schema loading and layer decoding."""

from .discovery import find_tmx_files_referencing_tsx, find_tsx_files_referencing_image
from .gid import TileFlags, decode_gid, encode_gid
from .layer_data import decode_layer_data
from .loader import load_tilemap, load_tileset, resolve_image_path
from .models import (
    STATIC_TILE,
    AnimatedTile,
    AnimationFrame,
    ResolvedTileset,
    StaticTile,
    Tilemap,
    TileKind,
    TileLayer,
    Tileset,
    TilesetImage,
    TilesetRef,
)

__all__ = [
    "AnimatedTile",
    "AnimationFrame",
    "ResolvedTileset",
    "STATIC_TILE",
    "StaticTile",
    "TileFlags",
    "TileKind",
    "TileLayer",
    "Tilemap",
    "Tileset",
    "TilesetImage",
    "TilesetRef",
    "decode_gid",
    "decode_layer_data",
    "encode_gid",
    "find_tmx_files_referencing_tsx",
    "find_tsx_files_referencing_image",
    "load_tilemap",
    "load_tileset",
    "resolve_image_path",
]
