"""Global tile id (GID) flag handling."""

from dataclasses import dataclass

# Tiled gid flags
FLIPPED_HORIZONTALLY_FLAG = 1 << 31
FLIPPED_VERTICALLY_FLAG = 1 << 30
FLIPPED_DIAGONALLY_FLAG = 1 << 29
GID_FLAGS_MASK = FLIPPED_HORIZONTALLY_FLAG | FLIPPED_VERTICALLY_FLAG | FLIPPED_DIAGONALLY_FLAG
TILE_ID_MASK = 0xFFFFFFFF & ~GID_FLAGS_MASK


@dataclass(frozen=True)
class TileFlags:
    horizontal: bool = False
    vertical: bool = False
    diagonal: bool = False

    @property
    def any(self) -> bool:
        return self.horizontal or self.vertical or self.diagonal


NO_FLAGS = TileFlags()


def decode_gid(gid: int) -> tuple[int, TileFlags]:
    """
    Split a raw GID into the actual tile id and its flip flags.

    Args:
        gid: 32-bit value as stored in layer data

    Returns:
        Tuple of the actual GID (flags masked off) and the flags
    """
    if gid < FLIPPED_DIAGONALLY_FLAG:
        return gid, NO_FLAGS
    flags = TileFlags(
        horizontal=gid & FLIPPED_HORIZONTALLY_FLAG != 0,
        vertical=gid & FLIPPED_VERTICALLY_FLAG != 0,
        diagonal=gid & FLIPPED_DIAGONALLY_FLAG != 0,
    )
    return gid & TILE_ID_MASK, flags


def encode_gid(actual_gid: int, flags: TileFlags = NO_FLAGS) -> int:
    """Combine an actual GID with flip flags into a raw GID."""
    gid = actual_gid & TILE_ID_MASK
    if flags.horizontal:
        gid |= FLIPPED_HORIZONTALLY_FLAG
    if flags.vertical:
        gid |= FLIPPED_VERTICALLY_FLAG
    if flags.diagonal:
        gid |= FLIPPED_DIAGONALLY_FLAG
    return gid
