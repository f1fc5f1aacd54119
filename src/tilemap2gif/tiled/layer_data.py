"""Decoding of tile layer ``<data>`` payloads into flat GID sequences."""

import base64
import binascii
import gzip
import struct
import zlib

from ..errors import DecodeError

SUPPORTED_ENCODINGS = ("csv", "base64")
SUPPORTED_COMPRESSIONS = ("gzip", "zlib")


def decode_layer_data(
    text: str | None,
    encoding: str | None = "csv",
    compression: str | None = None,
) -> tuple[int, ...]:
    """
    Return all GIDs from encoded and optionally compressed layer data.

    Args:
        text: Text content of the ``<data>`` element
        encoding: ``csv`` or ``base64``
        compression: ``gzip``, ``zlib`` or None (base64 only)

    Returns:
        Row-major tuple of raw 32-bit GIDs, flags included

    Raises:
        DecodeError: If the payload or its encoding is invalid or unsupported
    """
    encoding = (encoding or "").lower()
    compression = (compression or "").lower()
    if not text or not text.strip():
        raise DecodeError("Layer data is missing or empty")

    if encoding == "csv":
        if compression:
            raise DecodeError(f"CSV layer data cannot be compressed ({compression})")
        return _decode_csv(text)
    if encoding == "base64":
        return _decode_base64(text, compression)
    raise DecodeError(
        f"Unsupported layer data encoding: '{encoding}'. "
        f"Supported encodings: {', '.join(SUPPORTED_ENCODINGS)}"
    )


def _decode_csv(text: str) -> tuple[int, ...]:
    try:
        gids = tuple(int(value) for value in text.replace("\n", "").split(",") if value.strip())
    except ValueError as exc:
        raise DecodeError(f"Invalid CSV layer data: {exc}") from exc
    for gid in gids:
        if not 0 <= gid <= 0xFFFFFFFF:
            raise DecodeError(f"GID {gid} does not fit in 32 bits")
    return gids


def _decode_base64(text: str, compression: str) -> tuple[int, ...]:
    try:
        data = base64.b64decode("".join(text.split()), validate=True)
    except binascii.Error as exc:
        raise DecodeError(f"Invalid base64 layer data: {exc}") from exc

    try:
        if compression == "gzip":
            data = gzip.decompress(data)
        elif compression == "zlib":
            data = zlib.decompress(data)
        elif compression:
            raise DecodeError(
                f"Unsupported layer compression: '{compression}'. "
                f"Supported compressions: {', '.join(SUPPORTED_COMPRESSIONS)}"
            )
    except (OSError, EOFError, zlib.error) as exc:
        raise DecodeError(f"Could not decompress {compression} layer data: {exc}") from exc

    if len(data) % 4:
        raise DecodeError(f"Layer data length {len(data)} is not a multiple of 4 bytes")
    return struct.unpack(f"<{len(data) // 4}I", data)
