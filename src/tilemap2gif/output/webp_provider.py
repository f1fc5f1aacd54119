"""Animated WebP output provider.

Each frame keeps its own display time from ``delays``; the output is lossless so
tile colours survive unchanged.
"""

from .base import PillowSequenceOutputProvider


class WebPOutputProvider(PillowSequenceOutputProvider):
    """Output provider for lossless animated WebP."""

    @property
    def output_format(self) -> str:
        return "webp"

    @property
    def save_options(self) -> dict[str, object]:
        return {
            "lossless": True,
            "quality": 100,
            "method": 4,
            "exact": True,
        }
