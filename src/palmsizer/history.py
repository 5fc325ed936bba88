from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Deque, Iterator, List, Optional, Tuple

import numpy as np

from .classifier import classify
from .config import DEFAULT_CONFIG, MeasurementConfig
from .errors import EmptyHistory
from .types import AggregateSummary, HistoryRecord, SizeClass

logger = logging.getLogger(__name__)


class DistanceKind(str, Enum):
    PALM_WIDTH = "palm_width"
    PALM_LENGTH = "palm_length"


_MM_FIELDS = {
    DistanceKind.PALM_WIDTH: "palm_width_mm",
    DistanceKind.PALM_LENGTH: "palm_length_mm",
}

_THRESHOLD_FIELDS = {
    DistanceKind.PALM_WIDTH: "palm_width_thresholds",
    DistanceKind.PALM_LENGTH: "palm_length_thresholds",
}


class MeasurementHistory:
    """
    Append-only log of `HistoryRecord`s for one session.

    Storage order is insertion order, which is also chronological order.
    `aggregate()` recomputes the means over the whole log on every call,
    so it costs O(len(history)).

    With `max_records` set, the oldest records fall off the front and the
    means cover only the most recent `max_records` records.
    """

    def __init__(self, max_records: Optional[int] = None) -> None:
        if max_records is not None and max_records < 1:
            raise ValueError(f"max_records must be >= 1 or None, got {max_records}")
        self._max_records = max_records
        self._records: Deque[HistoryRecord] = deque(maxlen=max_records)

    @property
    def max_records(self) -> Optional[int]:
        return self._max_records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def append(self, record: HistoryRecord) -> None:
        self._records.append(record)

    def snapshot(self) -> Tuple[HistoryRecord, ...]:
        return tuple(self._records)

    def newest_first(self) -> Tuple[HistoryRecord, ...]:
        return tuple(reversed(self._records))

    def clear(self) -> None:
        dropped = len(self._records)
        self._records.clear()
        logger.info("History cleared (%d records dropped)", dropped)

    def valid_values(self, kind: DistanceKind) -> List[float]:
        attr = _MM_FIELDS[DistanceKind(kind)]
        values = [getattr(r, attr) for r in self._records]
        return [v for v in values if v is not None]

    def mean(self, kind: DistanceKind) -> float:
        """Arithmetic mean of the non-null millimeter values of `kind`."""
        kind = DistanceKind(kind)
        values = self.valid_values(kind)
        if not values:
            raise EmptyHistory(kind.value)
        return float(np.mean(values))

    def aggregate(self, config: Optional[MeasurementConfig] = None) -> AggregateSummary:
        cfg = config or DEFAULT_CONFIG

        width_mm, width_class = self._mean_and_class(DistanceKind.PALM_WIDTH, cfg)
        length_mm, length_class = self._mean_and_class(DistanceKind.PALM_LENGTH, cfg)

        return AggregateSummary(
            palm_width_mm=width_mm,
            palm_width_class=width_class,
            palm_length_mm=length_mm,
            palm_length_class=length_class,
            record_count=len(self._records),
        )

    def _mean_and_class(self, kind: DistanceKind, cfg: MeasurementConfig) -> Tuple[Optional[float], SizeClass]:
        try:
            value = self.mean(kind)
        except EmptyHistory as e:
            logger.debug("%s", e)
            return None, SizeClass.NOT_AVAILABLE

        thresholds = getattr(cfg, _THRESHOLD_FIELDS[kind])
        return value, classify(value, thresholds)
