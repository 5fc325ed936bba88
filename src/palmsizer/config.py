from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


# ID-1 card (credit card) dimensions in millimeters.
REFERENCE_LONG_SIDE_MM = 85.60
REFERENCE_SHORT_SIDE_MM = 53.98

# The detected card box is usually larger than the card itself (borders, blur).
REFERENCE_COMPENSATION_FACTOR = 0.90

# Landmark 5-17 sits inside the knuckles, so it under-reads true palm width.
PALM_WIDTH_COMPENSATION_FACTOR = 1.30
PALM_LENGTH_COMPENSATION_FACTOR = 1.00


@dataclass(frozen=True)
class SizeThresholds:
    """Lower bounds (mm) of the Medium and Large buckets."""

    medium_from: float
    large_from: float

    def __post_init__(self) -> None:
        if self.large_from < self.medium_from:
            raise ValueError(
                f"large_from ({self.large_from}) must be >= medium_from ({self.medium_from})"
            )


PALM_WIDTH_THRESHOLDS = SizeThresholds(medium_from=80.0, large_from=90.0)
PALM_LENGTH_THRESHOLDS = SizeThresholds(medium_from=80.0, large_from=100.0)


@dataclass(frozen=True)
class MeasurementConfig:
    """Tunable constants of the calibration and conversion pipeline."""

    reference_long_mm: float = REFERENCE_LONG_SIDE_MM
    reference_short_mm: float = REFERENCE_SHORT_SIDE_MM
    reference_compensation: float = REFERENCE_COMPENSATION_FACTOR
    palm_width_compensation: float = PALM_WIDTH_COMPENSATION_FACTOR
    palm_length_compensation: float = PALM_LENGTH_COMPENSATION_FACTOR
    palm_width_thresholds: SizeThresholds = field(default=PALM_WIDTH_THRESHOLDS)
    palm_length_thresholds: SizeThresholds = field(default=PALM_LENGTH_THRESHOLDS)
    max_history: Optional[int] = None  # None keeps every record for the session

    def __post_init__(self) -> None:
        for name in ("reference_long_mm", "reference_short_mm"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")
        for name in ("reference_compensation", "palm_width_compensation", "palm_length_compensation"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")
        if self.max_history is not None and self.max_history < 1:
            raise ValueError(f"max_history must be >= 1 or None, got {self.max_history}")


DEFAULT_CONFIG = MeasurementConfig()
