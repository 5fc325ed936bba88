"""Text rendering of the running estimate and the measurement history, and simple display sinks."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from .types import AggregateSummary, HistoryRecord, SizeClass
from .utils import format_optional

logger = logging.getLogger(__name__)

HISTORY_COLUMNS: Tuple[str, ...] = (
    "Timestamp",
    "Card Longer Side (px)",
    "Card Shorter Side (px)",
    "Dist 5 to 17 (px)",
    "Dist 5 to 17 (mm)",
    "Estimated Palm Width",
    "Dist 0 to 9 (px)",
    "Dist 0 to 9 (mm)",
    "Estimated Palm Length",
)

NO_HISTORY_MESSAGE = "No measurements captured yet when both hand and card were detected."

TIMESTAMP_FORMAT = "%H:%M:%S"


class DisplaySink(Protocol):
    def publish(self, summary: AggregateSummary, history: Sequence[HistoryRecord]) -> None:
        ...


def _summary_line(label: str, has_history: bool, value_mm: Optional[float], size: SizeClass) -> str:
    if not has_history:
        return f"{label}: Not detected"
    if value_mm is None:
        return f"{label}: N/A (No valid measurements)"
    return f"{label}: {value_mm:.2f} mm ({size.value})"


def format_summary(summary: AggregateSummary) -> Tuple[str, str]:
    """Returns the (palm width, palm length) display lines."""
    return (
        _summary_line("Palm Width", summary.has_history, summary.palm_width_mm, summary.palm_width_class),
        _summary_line("Palm Length", summary.has_history, summary.palm_length_mm, summary.palm_length_class),
    )


def format_history_rows(history: Sequence[HistoryRecord]) -> List[Tuple[str, ...]]:
    """One row of display strings per record, in the order given."""
    rows = []
    for r in history:
        rows.append(
            (
                r.timestamp.strftime(TIMESTAMP_FORMAT),
                f"{r.reference_long_px:.2f}",
                f"{r.reference_short_px:.2f}",
                f"{r.palm_width_px:.2f}",
                format_optional(r.palm_width_mm),
                r.palm_width_class.value,
                f"{r.palm_length_px:.2f}",
                format_optional(r.palm_length_mm),
                r.palm_length_class.value,
            )
        )
    return rows


def format_history_table(history: Sequence[HistoryRecord]) -> str:
    if not history:
        return NO_HISTORY_MESSAGE

    rows = format_history_rows(history)
    widths = [len(c) for c in HISTORY_COLUMNS]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt(cells: Sequence[str]) -> str:
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [fmt(HISTORY_COLUMNS), "-+-".join("-" * w for w in widths)]
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)


class RecordingSink:
    """Keeps the most recently published summary and history."""

    def __init__(self) -> None:
        self.summary = AggregateSummary()
        self.history: Tuple[HistoryRecord, ...] = ()
        self.publish_count = 0

    def publish(self, summary: AggregateSummary, history: Sequence[HistoryRecord]) -> None:
        self.summary = summary
        self.history = tuple(history)
        self.publish_count += 1


class LoggingSink:
    """Logs the summary lines whenever they change."""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level
        self._last: Optional[Tuple[str, str]] = None

    def publish(self, summary: AggregateSummary, history: Sequence[HistoryRecord]) -> None:
        lines = format_summary(summary)
        if lines == self._last:
            return
        self._last = lines
        logger.log(self._level, "%s | %s | records=%d", lines[0], lines[1], len(history))
