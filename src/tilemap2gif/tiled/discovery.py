"""Reverse lookup of the documents that reference a tileset or an image."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from .loader import resolve_image_path

logger = logging.getLogger(__name__)


def find_tsx_files_referencing_image(image_path: str | Path) -> list[Path]:
    """
    Find TSX files whose atlas image has the same file name as ``image_path``.

    The image's directory is searched recursively. Unreadable TSX files are
    logged and skipped.
    """
    image_path = Path(image_path)
    image_name = image_path.name.lower()
    matches = []
    for tsx_file in _scan(image_path.parent, "*.tsx"):
        try:
            root = ET.parse(tsx_file).getroot()
        except (ET.ParseError, OSError) as exc:
            logger.warning("Error reading TSX file %s: %s", tsx_file, exc)
            continue

        image_elem = root.find("image")
        source = image_elem.get("source") if image_elem is not None else None
        if source and resolve_image_path(tsx_file.parent, source).name.lower() == image_name:
            matches.append(tsx_file)
    return matches


def find_tmx_files_referencing_tsx(tsx_path: str | Path) -> list[Path]:
    """
    Find TMX files with an external tileset whose file name matches ``tsx_path``.

    The TSX's directory is searched recursively. Unreadable TMX files are
    logged and skipped.
    """
    tsx_path = Path(tsx_path)
    tsx_name = tsx_path.name.lower()
    matches = []
    for tmx_file in _scan(tsx_path.parent, "*.tmx"):
        try:
            root = ET.parse(tmx_file).getroot()
        except (ET.ParseError, OSError) as exc:
            logger.warning("Error reading TMX file %s: %s", tmx_file, exc)
            continue

        sources = (elem.get("source") for elem in root.findall("tileset"))
        if any(source and Path(source).name.lower() == tsx_name for source in sources):
            matches.append(tmx_file)
    return matches


def _scan(directory: Path, pattern: str) -> list[Path]:
    return sorted(path for path in directory.rglob(pattern) if path.is_file())
