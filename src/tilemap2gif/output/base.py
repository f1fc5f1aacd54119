"""Base class for output format providers."""

from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import Sequence

from PIL import Image

from ..errors import EncodeError


class OutputProvider(ABC):
    """Abstract base class for output format providers."""

    def __init__(self, path: str | Path = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = path

    @abstractmethod
    def encode(self, frames: Sequence[Image.Image], delays: Sequence[int]) -> bytes:
        """
        Encode frames into an infinitely looping animation.

        Args:
            frames: Composited frames in display order
            delays: Display duration of each frame in milliseconds

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def write(self, data: bytes) -> None:
        """
        Write encoded data to the output file, replacing any existing file.

        Args:
            data: Encoded data to write
        """
        if not self.path:
            raise ValueError("Output path not set")
        path = Path(self.path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise EncodeError(f"Failed to write '{path}': {e}") from e


class PillowSequenceOutputProvider(OutputProvider, ABC):
    """Template output provider for Pillow-supported animated image formats."""

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format identifier (for example, ``gif`` or ``webp``)."""
        raise NotImplementedError

    def encode(self, frames: Sequence[Image.Image], delays: Sequence[int]) -> bytes:
        frame_list = list(frames or [])
        if not frame_list:
            raise EncodeError("No frames to encode")
        if delays is None or len(delays) != len(frame_list):
            raise EncodeError("Delays must match the number of frames")
        if any(delay <= 0 for delay in delays):
            raise EncodeError("Frame delays must be positive")

        buffer = BytesIO()
        try:
            frame_list[0].save(
                buffer,
                format=self.output_format,
                save_all=True,
                append_images=frame_list[1:],
                duration=list(delays),
                loop=0,
                **self.save_options,
            )
        except (OSError, ValueError) as e:
            raise EncodeError(f"Error encoding {self.output_format.upper()}: {e}") from e
        return buffer.getvalue()

    @property
    def save_options(self) -> dict[str, object]:
        """Additional Pillow ``save`` kwargs for this format."""
        return {}
