from .config import MeasurementConfig, SizeThresholds
from .history import DistanceKind, MeasurementHistory
from .pipeline import FrameResult, HandSizeEstimator
from .types import AggregateSummary, HandLandmark, HistoryRecord, ReferenceBox, SizeClass

__all__ = [
    "AggregateSummary",
    "DistanceKind",
    "FrameResult",
    "HandLandmark",
    "HandSizeEstimator",
    "HistoryRecord",
    "MeasurementConfig",
    "MeasurementHistory",
    "ReferenceBox",
    "SizeClass",
    "SizeThresholds",
]
