from __future__ import annotations

from typing import Optional

from .classifier import classify_palm_length, classify_palm_width
from .config import DEFAULT_CONFIG, MeasurementConfig
from .types import CalibratedMeasurement, FrameMeasurement


def pixels_to_mm(distance_px: float, pixels_per_mm: Optional[float], compensation: float = 1.0) -> Optional[float]:
    """`distance_px / pixels_per_mm * compensation`, or None without a usable ratio."""
    if pixels_per_mm is None or pixels_per_mm <= 0:
        return None
    return (distance_px / pixels_per_mm) * compensation


def convert_measurement(
    measurement: FrameMeasurement,
    pixels_per_mm: Optional[float],
    config: Optional[MeasurementConfig] = None,
) -> CalibratedMeasurement:
    cfg = config or DEFAULT_CONFIG
    palm_width_mm = pixels_to_mm(measurement.palm_width_px, pixels_per_mm, cfg.palm_width_compensation)
    palm_length_mm = pixels_to_mm(measurement.palm_length_px, pixels_per_mm, cfg.palm_length_compensation)
    return CalibratedMeasurement(
        palm_width_mm=palm_width_mm,
        palm_length_mm=palm_length_mm,
        palm_width_class=classify_palm_width(palm_width_mm, cfg),
        palm_length_class=classify_palm_length(palm_length_mm, cfg),
    )
