"""Animated PNG output provider."""

from .base import PillowSequenceOutputProvider


class ApngOutputProvider(PillowSequenceOutputProvider):
    """Output provider for APNG format."""

    @property
    def output_format(self) -> str:
        return "png"

    @property
    def save_options(self) -> dict[str, object]:
        return {"disposal": 1}
