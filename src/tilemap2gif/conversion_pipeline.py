"""Tilemap-to-animation orchestration used by the CLI."""

import logging
from pathlib import Path

from .animation import RenderedAnimation, TilemapAnimator
from .animation.tile_images import apply_transparency, load_tileset_image
from .constants import (
    DEFAULT_FRAME_DELAY,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_WORKERS,
    IMAGE_SUFFIXES,
    TILEMAP_SUFFIX,
    TILESET_SUFFIX,
)
from .errors import ConversionError, ResolutionError
from .output import resolve_output_provider
from .tiled import (
    ResolvedTileset,
    Tilemap,
    find_tmx_files_referencing_tsx,
    find_tsx_files_referencing_image,
    load_tilemap,
    load_tileset,
)

logger = logging.getLogger(__name__)

SUPPORTED_INPUT_SUFFIXES = (TILEMAP_SUFFIX, TILESET_SUFFIX, *IMAGE_SUFFIXES)


def default_output_path(input_path: str | Path) -> Path:
    """Input path with its extension replaced by ``.gif``."""
    return Path(input_path).with_suffix(DEFAULT_OUTPUT_SUFFIX)


def resolve_tilemap_path(input_path: str | Path) -> Path:
    """
    Find the TMX to convert for a TMX, TSX or tileset image input.

    A TSX input resolves to the first TMX (in sorted order) referencing it; an
    image input first resolves to a TSX referencing the image.

    Raises:
        ConversionError: If the input type is unsupported
        ResolutionError: If no referencing document is found
    """
    path = Path(input_path).resolve()
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_INPUT_SUFFIXES:
        raise ConversionError(
            f"Unsupported input file type '{suffix}'. "
            f"File must end with one of: {', '.join(SUPPORTED_INPUT_SUFFIXES)}"
        )
    if not path.is_file():
        raise ResolutionError(f"Input file not found: {path}")

    if suffix == TILEMAP_SUFFIX:
        return path

    if suffix in IMAGE_SUFFIXES:
        tsx_files = find_tsx_files_referencing_image(path)
        if not tsx_files:
            raise ResolutionError(f"No TSX file found referencing the input image: {path}")
        logger.info("Found TSX file referencing %s: %s", path.name, tsx_files[0])
        path = tsx_files[0]

    tmx_files = find_tmx_files_referencing_tsx(path)
    if not tmx_files:
        raise ResolutionError(f"No TMX file found referencing the tileset: {path}")
    logger.info("Found TMX file referencing %s: %s", path.name, tmx_files[0])
    return tmx_files[0]


def load_resolved_tilesets(tilemap: Tilemap) -> list[ResolvedTileset]:
    """
    Load every tileset of the map together with its transparency-keyed atlas.

    Tilesets without an image are skipped with a warning.

    Raises:
        ResolutionError: If no tileset could be loaded
    """
    base_dir = tilemap.source_path.parent if tilemap.source_path else Path.cwd()
    resolved = []
    for ref in tilemap.tilesets:
        if ref.tileset is not None:
            tileset = ref.tileset
        elif ref.source:
            logger.info("Loading tileset %s", ref.source)
            tileset = load_tileset((base_dir / ref.source).resolve())
        else:
            logger.warning("Tileset with firstgid %d has no source, skipping", ref.first_gid)
            continue

        if tileset.image is None:
            logger.warning("Tileset '%s' has no image defined, skipping", tileset.name)
            continue

        atlas = apply_transparency(load_tileset_image(tileset.image.source), tileset.transparent_color)
        resolved.append(ResolvedTileset(ref.first_gid, tileset.with_atlas_width(atlas.width), atlas))

    if not resolved:
        raise ResolutionError("No tilesets could be loaded for the conversion")
    return resolved


def render_tilemap(
    tilemap_path: str | Path,
    *,
    frame_delay: int = DEFAULT_FRAME_DELAY,
    workers: int = DEFAULT_WORKERS,
) -> RenderedAnimation:
    """Load a TMX with its tilesets and render one full animation loop."""
    tilemap = load_tilemap(tilemap_path)
    tilesets = load_resolved_tilesets(tilemap)

    layer_grids = []
    for layer in tilemap.layers:
        if not layer.visible:
            logger.debug("Skipping hidden layer '%s'", layer.name)
            continue
        layer_grids.append(layer.gids)

    animator = TilemapAnimator(
        tilemap,
        tilesets,
        layer_grids,
        frame_delay=frame_delay,
        workers=workers,
    )
    return animator.generate()


def convert(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    frame_delay: int = DEFAULT_FRAME_DELAY,
    workers: int = DEFAULT_WORKERS,
) -> Path:
    """
    Convert a TMX, TSX or tileset image into a looping animation file.

    Returns:
        Path of the written animation
    """
    output = Path(output_path) if output_path else default_output_path(input_path)
    try:
        provider = resolve_output_provider(output)
    except ValueError as e:
        raise ConversionError(str(e)) from e

    tilemap_path = resolve_tilemap_path(input_path)
    animation = render_tilemap(tilemap_path, frame_delay=frame_delay, workers=workers)
    try:
        logger.info("Encoding %d frames to %s", len(animation.frames), output)
        encoded = provider.encode(animation.frames, animation.delays)
    finally:
        animation.close()
    provider.write(encoded)
    return output
