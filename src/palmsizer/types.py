from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple


Box2 = Tuple[int, int, int, int]  # (x_min, y_min, x_max, y_max)

# Anything exposing normalized `.x` / `.y` works (HandLandmark, raw MediaPipe landmarks).
LandmarkSet = Sequence[Any]

WRIST = 0
INDEX_MCP = 5
MIDDLE_MCP = 9
PINKY_MCP = 17

PALM_WIDTH_PAIR: Tuple[int, int] = (INDEX_MCP, PINKY_MCP)
PALM_LENGTH_PAIR: Tuple[int, int] = (WRIST, MIDDLE_MCP)

# Highest index consumed is 17.
MIN_LANDMARKS = PINKY_MCP + 1


class SizeClass(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    NOT_AVAILABLE = "N/A"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HandLandmark:
    """A single hand landmark with both normalized and pixel coordinates."""

    idx: int
    x: float
    y: float
    z: float
    x_px: int
    y_px: int


@dataclass(frozen=True)
class ReferenceBox:
    """Bounding box of the reference card in pixel space."""

    width: float
    height: float
    x: float = 0.0
    y: float = 0.0

    @property
    def long_side(self) -> float:
        return max(self.width, self.height)

    @property
    def short_side(self) -> float:
        return min(self.width, self.height)

    @property
    def bbox_px(self) -> Box2:
        x0 = int(round(self.x))
        y0 = int(round(self.y))
        return (x0, y0, x0 + int(round(self.width)), y0 + int(round(self.height)))


@dataclass(frozen=True)
class FrameMeasurement:
    """Pixel spans of one frame's hand. Not retained past the frame."""

    palm_width_px: float  # landmark 5 <-> 17
    palm_length_px: float  # landmark 0 <-> 9


@dataclass(frozen=True)
class ReferenceCalibration:
    long_side_px: float
    short_side_px: float
    pixels_per_mm: Optional[float]

    @property
    def is_defined(self) -> bool:
        return self.pixels_per_mm is not None


@dataclass(frozen=True)
class CalibratedMeasurement:
    palm_width_mm: Optional[float]
    palm_length_mm: Optional[float]
    palm_width_class: SizeClass
    palm_length_class: SizeClass


@dataclass(frozen=True)
class HistoryRecord:
    """One frame in which both a hand and the reference card were detected."""

    timestamp: datetime
    palm_width_px: float
    palm_length_px: float
    palm_width_mm: Optional[float]
    palm_length_mm: Optional[float]
    palm_width_class: SizeClass
    palm_length_class: SizeClass
    reference_long_px: float
    reference_short_px: float


@dataclass(frozen=True)
class AggregateSummary:
    """Running mean over the history and the class of each mean."""

    palm_width_mm: Optional[float] = None
    palm_width_class: SizeClass = SizeClass.NOT_AVAILABLE
    palm_length_mm: Optional[float] = None
    palm_length_class: SizeClass = SizeClass.NOT_AVAILABLE
    record_count: int = 0

    @property
    def has_history(self) -> bool:
        return self.record_count > 0

    @property
    def palm_width_available(self) -> bool:
        return self.palm_width_mm is not None

    @property
    def palm_length_available(self) -> bool:
        return self.palm_length_mm is not None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "palmWidthMm": self.palm_width_mm,
            "palmWidthClass": self.palm_width_class.value,
            "palmLengthMm": self.palm_length_mm,
            "palmLengthClass": self.palm_length_class.value,
        }
