"""Pixels-per-millimeter scale from the reference card detected in the current frame."""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from .config import DEFAULT_CONFIG, MeasurementConfig
from .errors import UndefinedCalibration
from .types import ReferenceBox, ReferenceCalibration

logger = logging.getLogger(__name__)


def compensate_reference_box(box: ReferenceBox, factor: float) -> Tuple[float, float]:
    """Scale both sides by `factor`; returns (long_px, short_px)."""
    width_px = float(box.width) * factor
    height_px = float(box.height) * factor
    return (max(width_px, height_px), min(width_px, height_px))


def compute_pixels_per_mm(long_side_px: float, reference_long_mm: float) -> float:
    if not math.isfinite(long_side_px) or long_side_px <= 0:
        raise UndefinedCalibration(long_side_px)
    return long_side_px / reference_long_mm


def resolve_calibration(box: ReferenceBox, config: Optional[MeasurementConfig] = None) -> ReferenceCalibration:
    """
    Calibrate against this frame's reference box.

    A degenerate box (zero, negative or non-finite sides) still yields its
    compensated sides, with `pixels_per_mm=None`.
    """

    cfg = config or DEFAULT_CONFIG
    long_px, short_px = compensate_reference_box(box, cfg.reference_compensation)
    try:
        # max()/min() drop a NaN side depending on argument order.
        if not (math.isfinite(box.width) and math.isfinite(box.height)):
            raise UndefinedCalibration(long_px)
        pixels_per_mm: Optional[float] = compute_pixels_per_mm(long_px, cfg.reference_long_mm)
    except UndefinedCalibration as e:
        logger.debug("%s", e)
        pixels_per_mm = None
    return ReferenceCalibration(long_side_px=long_px, short_side_px=short_px, pixels_per_mm=pixels_per_mm)
