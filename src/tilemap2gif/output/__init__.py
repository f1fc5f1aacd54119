"""Output providers for different animation formats."""

from dataclasses import dataclass
from pathlib import Path

from .apng_provider import ApngOutputProvider
from .base import OutputProvider, PillowSequenceOutputProvider
from .gif_provider import GifOutputProvider
from .webp_provider import WebPOutputProvider


@dataclass(frozen=True)
class OutputFormatSpec:
    extension: str
    provider_class: type[OutputProvider]


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "gif": OutputFormatSpec(
        extension=".gif",
        provider_class=GifOutputProvider,
    ),
    "webp": OutputFormatSpec(
        extension=".webp",
        provider_class=WebPOutputProvider,
    ),
    "png": OutputFormatSpec(
        extension=".png",
        provider_class=ApngOutputProvider,
    ),
}


def resolve_output_provider(file_path: str | Path) -> OutputProvider:
    """
    Resolve the appropriate output provider based on file extension.

    Args:
        file_path: Output file path (extension determines format)

    Returns:
        An OutputProvider instance

    Raises:
        ValueError: If file extension is not supported
    """
    ext = Path(file_path).suffix.lower()
    spec = _output_spec_from_extension(ext)
    return spec.provider_class(file_path)


def supported_output_extensions() -> tuple[str, ...]:
    """Return supported output file extensions."""
    return tuple(spec.extension for spec in _OUTPUT_FORMATS.values())


def _output_spec_from_extension(ext: str) -> OutputFormatSpec:
    output_format = ext.removeprefix(".")
    spec = _OUTPUT_FORMATS.get(output_format)
    if spec is not None:
        return spec
    supported = ", ".join(supported_output_extensions())
    raise ValueError(f"Unsupported output format: {ext}. Supported formats: {supported}")


__all__ = [
    "ApngOutputProvider",
    "GifOutputProvider",
    "OutputFormatSpec",
    "OutputProvider",
    "PillowSequenceOutputProvider",
    "WebPOutputProvider",
    "resolve_output_provider",
    "supported_output_extensions",
]
