"""
Small numeric helpers shared by the mapping and color modules
"""
import math
from typing import Tuple


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (floor(v + 0.5))."""
    return int(math.floor(value + 0.5))


def clamp(value, low, high):
    """Constrain value into [low, high]."""
    return max(low, min(high, value))


def rotate_point(x: float, y: float, cx: float, cy: float, angle: float) -> Tuple[float, float]:
    """
    Rotate (x, y) around (cx, cy) by angle radians.

    Returns:
        Rotated (x, y) as floats
    """
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    dx = x - cx
    dy = y - cy
    return cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a
