"""Global constants for the application."""

# Animation settings
DEFAULT_FRAME_DELAY = 100  # Milliseconds a static map is shown for
MIN_FRAME_DELAY = 10  # Shortest delay players reliably honour (ms)
DEFAULT_WORKERS = 1  # Threads used to render frames

# Input files
TILEMAP_SUFFIX = ".tmx"
TILESET_SUFFIX = ".tsx"
IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp")
DEFAULT_OUTPUT_SUFFIX = ".gif"

# Environment overrides (also read from .env)
FRAME_DELAY_ENV = "TILEMAP2GIF_FRAME_DELAY"
WORKERS_ENV = "TILEMAP2GIF_WORKERS"
