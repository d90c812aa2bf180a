"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
from typing import Tuple


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def bounds(x: float, y: float, size: float) -> Tuple[float, float, float, float]:
    """(left, right, top, bottom) of a square box centered on (x, y)"""
    half = size / 2
    return x - half, x + half, y - half, y + half


def overlaps(a, b) -> bool:
    """
    Axis-aligned box test between two entities exposing x, y and size.

    Intervals are closed: boxes that only touch along an edge overlap.
    """
    a_left, a_right, a_top, a_bottom = bounds(a.x, a.y, a.size)
    b_left, b_right, b_top, b_bottom = bounds(b.x, b.y, b.size)
    return not (
        a_right < b_left
        or a_left > b_right
        or a_bottom < b_top
        or a_top > b_bottom
    )


def out_of_arena(x: float, y: float, width: float, height: float) -> bool:
    """True when a point has left [0, width] x [0, height] on any axis"""
    return x < 0 or x > width or y < 0 or y > height
