from __future__ import annotations

from typing import Optional

from .config import DEFAULT_CONFIG, MeasurementConfig, SizeThresholds
from .types import SizeClass

__all__ = [
    "classify",
    "classify_optional",
    "classify_palm_width",
    "classify_palm_length",
]


def classify(value_mm: float, thresholds: SizeThresholds) -> SizeClass:
    """Bucket a millimeter value. Boundary values go to the upper bucket."""
    if value_mm < thresholds.medium_from:
        return SizeClass.SMALL
    if value_mm < thresholds.large_from:
        return SizeClass.MEDIUM
    return SizeClass.LARGE


def classify_optional(value_mm: Optional[float], thresholds: SizeThresholds) -> SizeClass:
    if value_mm is None:
        return SizeClass.NOT_AVAILABLE
    return classify(value_mm, thresholds)


def classify_palm_width(value_mm: Optional[float], config: Optional[MeasurementConfig] = None) -> SizeClass:
    return classify_optional(value_mm, (config or DEFAULT_CONFIG).palm_width_thresholds)


def classify_palm_length(value_mm: Optional[float], config: Optional[MeasurementConfig] = None) -> SizeClass:
    return classify_optional(value_mm, (config or DEFAULT_CONFIG).palm_length_thresholds)
