"""CLI interface for tilemap2gif."""

import logging
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .constants import DEFAULT_FRAME_DELAY, DEFAULT_WORKERS, FRAME_DELAY_ENV, WORKERS_ENV
from .conversion_pipeline import convert, default_output_path
from .errors import ConversionError
from .output import supported_output_extensions

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_extensions())


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    input_file: str = typer.Argument(
        None, help="Tilemap (.tmx), tileset (.tsx) or tileset image to convert"
    ),
    out: str = typer.Option(
        None,
        "--output",
        "-o",
        help=f"Output animation path ({SUPPORTED_OUTPUT_FORMATS_TEXT}); defaults to the input name with .gif",
    ),
    frame_delay: int | None = typer.Option(
        None,
        "--frame-delay",
        "-d",
        envvar=FRAME_DELAY_ENV,
        help=f"Delay in milliseconds used when the map has no animation [default: {DEFAULT_FRAME_DELAY}]",
    ),
    fps: int | None = typer.Option(
        None,
        "--fps",
        help="Alternative to --frame-delay: frames per second for a map without animation",
    ),
    workers: int = typer.Option(
        DEFAULT_WORKERS,
        "--workers",
        "-w",
        envvar=WORKERS_ENV,
        help="Number of threads used to render frames",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output",
    ),
) -> None:
    """
    Convert a Tiled tilemap and its tilesets into a looping animation.

    A tileset or tileset image input is resolved to the first tilemap in its
    directory tree that uses it.

    Examples:
      # Convert a map next to it as level1.gif
      tilemap2gif maps/level1.tmx

      # Find the map using a tileset image and write a WebP
      tilemap2gif tiles/water.png --output water.webp
    """
    _configure_logging(verbose)
    try:
        if not input_file:
            raise CLIError("Input file is required")

        delay = _resolve_frame_delay(frame_delay, fps)
        if workers <= 0:
            raise CLIError(f"Invalid workers value '{workers}'. Workers should be greater than 0.")

        output_path = out or str(default_output_path(input_file))
        ext = Path(output_path).suffix[1:].upper()
        console.print(f"[bold blue]Converting {input_file} to {ext}...[/bold blue]")

        written = convert(input_file, output_path, frame_delay=delay, workers=workers)
        console.print(f"[green]✓[/green] {ext} saved to {written}")

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except ConversionError as e:
        err_console.print(f"[bold red]Conversion failed:[/bold red] {e}")
        if verbose:
            err_console.print_exception()
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        if verbose:
            err_console.print_exception()
        sys.exit(1)


def _resolve_frame_delay(frame_delay: int | None, fps: int | None) -> int:
    """Turn --frame-delay / --fps into a delay in milliseconds."""
    if frame_delay is not None and fps is not None:
        raise CLIError("Cannot specify both --frame-delay and --fps. Choose one.")
    if fps is not None:
        if fps <= 0:
            raise CLIError(f"Invalid FPS value '{fps}'. Animation FPS should be greater than 0.")
        return max(1, 1000 // fps)
    if frame_delay is None:
        return DEFAULT_FRAME_DELAY
    if frame_delay <= 0:
        raise CLIError(f"Invalid frame delay '{frame_delay}'. Frame delay should be greater than 0.")
    return frame_delay


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
