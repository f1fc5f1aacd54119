"""Shared fixtures: a tiny four-tile atlas and on-disk Tiled projects."""

from dataclasses import dataclass
from pathlib import Path

import pytest
from PIL import Image

from tilemap2gif.tiled.models import (
    AnimatedTile,
    AnimationFrame,
    ResolvedTileset,
    Tilemap,
    TileLayer,
    Tileset,
)

TILE_SIZE = 2
RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)
TILE_COLORS = (RED, GREEN, BLUE, WHITE)

WATER_ANIMATION = """
 <tile id="0">
  <animation>
   <frame tileid="0" duration="100"/>
   <frame tileid="1" duration="200"/>
  </animation>
 </tile>"""


def make_atlas(colors=TILE_COLORS, tile_size: int = TILE_SIZE) -> Image.Image:
    """One row of solid-colour tiles."""
    atlas = Image.new("RGBA", (tile_size * len(colors), tile_size), (0, 0, 0, 0))
    for index, color in enumerate(colors):
        atlas.paste(color, (index * tile_size, 0, (index + 1) * tile_size, tile_size))
    return atlas


def make_tileset(animations: dict[int, tuple[tuple[int, int], ...]] | None = None) -> Tileset:
    """Tileset over ``make_atlas`` with ``{tile: ((tile_id, duration), ...)}`` animations."""
    return Tileset(
        name="tiles",
        tile_width=TILE_SIZE,
        tile_height=TILE_SIZE,
        columns=len(TILE_COLORS),
        tile_count=len(TILE_COLORS),
        animations={
            tile_id: AnimatedTile(
                tile_id=tile_id,
                frames=tuple(AnimationFrame(frame_id, duration) for frame_id, duration in frames),
            )
            for tile_id, frames in (animations or {}).items()
        },
    )


def make_tilemap(*grids, width: int = 2, height: int = 2, background_color: str | None = None) -> Tilemap:
    return Tilemap(
        width=width,
        height=height,
        tile_width=TILE_SIZE,
        tile_height=TILE_SIZE,
        layers=tuple(TileLayer(name=f"Layer {i}", gids=tuple(grid)) for i, grid in enumerate(grids, 1)),
        background_color=background_color,
    )


@dataclass
class TiledProject:
    tmx: Path
    tsx: Path
    image: Path


@pytest.fixture
def atlas() -> Image.Image:
    return make_atlas()


@pytest.fixture
def static_tileset() -> Tileset:
    return make_tileset()


@pytest.fixture
def animated_tileset() -> Tileset:
    return make_tileset({0: ((0, 100), (1, 200))})


@pytest.fixture
def resolved(atlas):
    """Factory binding a tileset to ``atlas`` at a first GID."""

    def bind(tileset: Tileset, first_gid: int = 1) -> ResolvedTileset:
        return ResolvedTileset(first_gid=first_gid, tileset=tileset, image=atlas)

    return bind


@pytest.fixture
def write_project(tmp_path):
    """Factory writing tiles.png, tiles.tsx and map.tmx into a directory."""

    def write(
        csv: str = "1,2,\n3,0",
        animation: str = WATER_ANIMATION,
        directory: Path | None = None,
        map_attributes: str = "",
        extra_layers: str = "",
    ) -> TiledProject:
        directory = directory or tmp_path
        directory.mkdir(parents=True, exist_ok=True)

        image = directory / "tiles.png"
        make_atlas().save(image)

        tsx = directory / "tiles.tsx"
        tsx.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<tileset version="1.10" name="tiles" tilewidth="{TILE_SIZE}" tileheight="{TILE_SIZE}" '
            f'tilecount="4" columns="4">\n'
            f' <image source="tiles.png" width="{TILE_SIZE * 4}" height="{TILE_SIZE}"/>'
            f"{animation}\n"
            "</tileset>\n"
        )

        tmx = directory / "map.tmx"
        tmx.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<map version="1.10" orientation="orthogonal" renderorder="right-down" width="2" height="2" '
            f'tilewidth="{TILE_SIZE}" tileheight="{TILE_SIZE}" infinite="0"{map_attributes}>\n'
            ' <tileset firstgid="1" source="tiles.tsx"/>\n'
            ' <layer id="1" name="Ground" width="2" height="2">\n'
            f'  <data encoding="csv">\n{csv}\n</data>\n'
            " </layer>\n"
            f"{extra_layers}"
            "</map>\n"
        )
        return TiledProject(tmx=tmx, tsx=tsx, image=image)

    return write
