"""Builders shared by the test modules."""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from palmsizer.types import HandLandmark, HistoryRecord, SizeClass


GOLDEN_POINTS: Dict[int, Tuple[float, float]] = {
    0: (0.50, 0.50),
    5: (0.40, 0.40),
    9: (0.50, 0.30),
    17: (0.60, 0.40),
}


def make_landmarks(points: Optional[Dict[int, Tuple[float, float]]] = None, count: int = 21) -> List[HandLandmark]:
    points = points or {}
    out = []
    for idx in range(count):
        x, y = points.get(idx, (0.5, 0.5))
        out.append(HandLandmark(idx=idx, x=x, y=y, z=0.0, x_px=0, y_px=0))
    return out


def make_record(
    palm_width_mm: Optional[float],
    palm_length_mm: Optional[float] = None,
    timestamp: Optional[datetime] = None,
) -> HistoryRecord:
    return HistoryRecord(
        timestamp=timestamp or datetime(2024, 1, 1, 12, 0, 0),
        palm_width_px=100.0,
        palm_length_px=80.0,
        palm_width_mm=palm_width_mm,
        palm_length_mm=palm_length_mm,
        palm_width_class=SizeClass.NOT_AVAILABLE,
        palm_length_class=SizeClass.NOT_AVAILABLE,
        reference_long_px=270.0,
        reference_short_px=170.1,
    )


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 30, 0)) -> None:
        self._now = start

    def __call__(self) -> datetime:
        now = self._now
        self._now = now + timedelta(seconds=1)
        return now


