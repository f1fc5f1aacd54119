"""Colour strings as written by Tiled."""

RGBA = tuple[int, int, int, int]


def parse_hex_color(value: str) -> RGBA:
    """
    Parse ``RRGGBB`` or ``AARRGGBB``, with or without a leading ``#``.

    Raises:
        ValueError: If the string is not a hex colour
    """
    text = value.strip().removeprefix("#")
    if len(text) not in (6, 8):
        raise ValueError(f"Invalid colour '{value}': expected RRGGBB or AARRGGBB")
    try:
        channels = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
    except ValueError:
        raise ValueError(f"Invalid colour '{value}': not hexadecimal") from None

    if len(channels) == 3:
        r, g, b = channels
        return r, g, b, 255
    a, r, g, b = channels
    return r, g, b, a
