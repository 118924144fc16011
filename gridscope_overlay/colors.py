"""
Color helpers: hex formatting and the white-to-red cost ramp.
"""

import math
from typing import Tuple


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; ramp and labels round .5 up.
    return int(math.floor(value + 0.5))


def component_to_hex(n: int) -> str:
    """Two lowercase hex digits, zero padded."""
    return f"{n:02x}"


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """
    Format an RGB triple as "#rrggbb".

    Example:
        >>> rgb_to_hex(255, 0, 0)
        '#ff0000'
    """
    return "#" + component_to_hex(r) + component_to_hex(g) + component_to_hex(b)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse "#rrggbb" (or "#rgb") into an RGB triple."""
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def cost_ramp(value: int, max_value: int) -> str:
    """
    White-to-red color for value / max_value.

    channel = round(255 * value / max_value), color = rgb(255, 255 - c, 255 - c)

    Args:
        value: Cell value
        max_value: Ramp denominator (>= 1)
    """
    channel = round_half_up(255 * value / max_value)
    return rgb_to_hex(255, 255 - channel, 255 - channel)
