from __future__ import annotations

import math
from typing import Optional, Tuple


def clamp_int(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def to_pixel(x_norm: float, y_norm: float, w: int, h: int) -> Tuple[int, int]:
    """Normalized -> pixel coordinates, clamped to the frame."""
    x_px = clamp_int(int(round(x_norm * w)), 0, w - 1)
    y_px = clamp_int(int(round(y_norm * h)), 0, h - 1)
    return (x_px, y_px)


def euclidean(dx: float, dy: float) -> float:
    return math.sqrt(dx ** 2 + dy ** 2)


def midpoint(p0: Tuple[int, int], p1: Tuple[int, int]) -> Tuple[int, int]:
    return (int((p0[0] + p1[0]) / 2), int((p0[1] + p1[1]) / 2))


def format_optional(value: Optional[float], digits: int = 2, missing: str = "N/A") -> str:
    if value is None:
        return missing
    return f"{value:.{digits}f}"

