"""Convert Tiled tilemaps into looping animations."""

__version__ = "0.1.0"
