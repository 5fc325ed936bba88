from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from .calibration import resolve_calibration
from .config import DEFAULT_CONFIG, MeasurementConfig
from .converter import convert_measurement
from .display import DisplaySink
from .errors import InsufficientLandmarks
from .extractor import extract_frame_distances
from .history import MeasurementHistory
from .types import (
    AggregateSummary,
    CalibratedMeasurement,
    FrameMeasurement,
    HistoryRecord,
    LandmarkSet,
    ReferenceBox,
    ReferenceCalibration,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """Everything computed for one frame, plus the session view after it."""

    measurement: Optional[FrameMeasurement]
    calibration: Optional[ReferenceCalibration]
    calibrated: Optional[CalibratedMeasurement]
    record: Optional[HistoryRecord]
    summary: AggregateSummary
    history: Tuple[HistoryRecord, ...]  # newest first

    @property
    def appended(self) -> bool:
        return self.record is not None


class HandSizeEstimator:
    """
    Frame-driven palm size estimator.

    Each call to `process_frame` consumes one frame's detections and runs to
    completion: extraction, same-frame calibration, conversion, classification,
    history append (only when both a hand and a reference card are present),
    aggregation and publishing to the display sinks.

    Not thread-safe; drive it from a single capture loop.
    """

    def __init__(
        self,
        config: Optional[MeasurementConfig] = None,
        history: Optional[MeasurementHistory] = None,
        sinks: Iterable[DisplaySink] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._history = history if history is not None else MeasurementHistory(self._config.max_history)
        self._sinks: List[DisplaySink] = list(sinks)
        self._clock = clock
        self._summary = AggregateSummary()

    @property
    def config(self) -> MeasurementConfig:
        return self._config

    @property
    def history(self) -> MeasurementHistory:
        return self._history

    @property
    def summary(self) -> AggregateSummary:
        return self._summary

    def add_sink(self, sink: DisplaySink) -> None:
        self._sinks.append(sink)

    def reset(self) -> None:
        """Start a new session: drop the history and the running estimate."""
        self._history.clear()
        self._summary = AggregateSummary()
        self._publish()

    def process_frame(
        self,
        landmarks: Optional[LandmarkSet],
        reference_box: Optional[ReferenceBox],
        frame_width: int,
        frame_height: int,
    ) -> FrameResult:
        if frame_width <= 0 or frame_height <= 0:
            raise ValueError(f"Frame size must be positive, got {frame_width}x{frame_height}")

        measurement: Optional[FrameMeasurement] = None
        if landmarks:
            try:
                measurement = extract_frame_distances(landmarks, frame_width, frame_height)
            except InsufficientLandmarks as e:
                logger.debug("Hand not usable this frame: %s", e)

        calibration: Optional[ReferenceCalibration] = None
        if reference_box is not None:
            calibration = resolve_calibration(reference_box, self._config)

        calibrated: Optional[CalibratedMeasurement] = None
        record: Optional[HistoryRecord] = None
        if measurement is not None and calibration is not None:
            calibrated = convert_measurement(measurement, calibration.pixels_per_mm, self._config)
            record = HistoryRecord(
                timestamp=self._clock(),
                palm_width_px=measurement.palm_width_px,
                palm_length_px=measurement.palm_length_px,
                palm_width_mm=calibrated.palm_width_mm,
                palm_length_mm=calibrated.palm_length_mm,
                palm_width_class=calibrated.palm_width_class,
                palm_length_class=calibrated.palm_length_class,
                reference_long_px=calibration.long_side_px,
                reference_short_px=calibration.short_side_px,
            )
            self._history.append(record)

        self._summary = self._history.aggregate(self._config)
        history = self._publish()

        return FrameResult(
            measurement=measurement,
            calibration=calibration,
            calibrated=calibrated,
            record=record,
            summary=self._summary,
            history=history,
        )

    def _publish(self) -> Tuple[HistoryRecord, ...]:
        history = self._history.newest_first()
        for sink in self._sinks:
            sink.publish(self._summary, history)
        return history
