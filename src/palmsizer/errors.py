from __future__ import annotations


class MeasurementError(Exception):
    """Base class for recoverable, per-frame measurement conditions."""


class InsufficientLandmarks(MeasurementError):
    def __init__(self, count: int, required: int) -> None:
        super().__init__(f"Need at least {required} hand landmarks, got {count}.")
        self.count = count
        self.required = required


class UndefinedCalibration(MeasurementError):
    def __init__(self, long_side_px: float) -> None:
        super().__init__(f"Reference long side must be > 0 px to calibrate, got {long_side_px}.")
        self.long_side_px = long_side_px


class EmptyHistory(MeasurementError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"No valid millimeter values recorded for {kind}.")
        self.kind = kind
