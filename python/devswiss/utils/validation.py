"""
Input validation utilities for dev-swiss.
"""

import re
from typing import Tuple

from ..exceptions import InvalidColorError

# Hex color: optional leading '#', six hex digits
HEX_COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

NAMED_COLORS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
}

LOGO_SIZE_MIN = 5
LOGO_SIZE_MAX = 30


def parse_color(color: str) -> Tuple[int, int, int]:
    """
    Parse a color name or hex string into an RGB tuple.

    Args:
        color: Named color (black, white, red, green, blue) or hex (#ff5500 / ff5500)

    Returns:
        (red, green, blue) tuple

    Raises:
        InvalidColorError: If the color cannot be parsed
    """
    if not isinstance(color, str):
        raise InvalidColorError(f"Invalid color format: {color!r}")

    color = color.strip()

    named = NAMED_COLORS.get(color.lower())
    if named is not None:
        return named

    match = HEX_COLOR_PATTERN.match(color)
    if not match:
        raise InvalidColorError(f"Invalid color format: {color}")

    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def format_hex_color(rgb: Tuple[int, int, int]) -> str:
    """Format an RGB tuple as #rrggbb."""
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def validate_logo_size(size_percent: int) -> bool:
    """
    Check a logo size percentage.

    Args:
        size_percent: Logo width as a percentage of the QR image

    Returns:
        True if the size is within bounds
    """
    if not isinstance(size_percent, int):
        return False

    return LOGO_SIZE_MIN <= size_percent <= LOGO_SIZE_MAX


def get_logo_size_error_message(size_percent: int) -> str:
    """
    Get a descriptive error message for an invalid logo size.

    Args:
        size_percent: The rejected percentage

    Returns:
        Error message describing the accepted range
    """
    return (
        f"Logo size must be between {LOGO_SIZE_MIN}% and {LOGO_SIZE_MAX}% "
        f"of QR code, got {size_percent}%"
    )
