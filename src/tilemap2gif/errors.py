"""Exceptions raised while converting a tilemap."""


class ConversionError(Exception):
    """Fatal error that aborts a conversion."""
    pass


class ResolutionError(ConversionError):
    """A map, tileset or image could not be located or loaded."""
    pass


class DecodeError(ConversionError):
    """A TMX/TSX document or a layer payload could not be decoded."""
    pass


class RenderError(ConversionError):
    """Compositing a frame failed."""
    pass


class EncodeError(ConversionError):
    """Frames could not be encoded into the output format."""
    pass
