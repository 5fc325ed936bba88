import logging
from datetime import datetime

from tests.helpers import make_record
from palmsizer.display import (
    HISTORY_COLUMNS,
    NO_HISTORY_MESSAGE,
    LoggingSink,
    RecordingSink,
    format_history_rows,
    format_history_table,
    format_summary,
)
from palmsizer.types import AggregateSummary, HistoryRecord, SizeClass


def _record(**overrides):
    fields = dict(
        timestamp=datetime(2024, 3, 5, 14, 7, 9),
        palm_width_px=128.0,
        palm_length_px=96.0,
        palm_width_mm=52.7551,
        palm_length_mm=None,
        palm_width_class=SizeClass.SMALL,
        palm_length_class=SizeClass.NOT_AVAILABLE,
        reference_long_px=270.0,
        reference_short_px=170.1,
    )
    fields.update(overrides)
    return HistoryRecord(**fields)


class TestFormatSummary:
    def test_no_history(self):
        assert format_summary(AggregateSummary()) == (
            "Palm Width: Not detected",
            "Palm Length: Not detected",
        )

    def test_history_without_valid_values(self):
        assert format_summary(AggregateSummary(record_count=3)) == (
            "Palm Width: N/A (No valid measurements)",
            "Palm Length: N/A (No valid measurements)",
        )

    def test_values(self):
        summary = AggregateSummary(
            palm_width_mm=84.456,
            palm_width_class=SizeClass.MEDIUM,
            palm_length_mm=101.0,
            palm_length_class=SizeClass.LARGE,
            record_count=4,
        )
        assert format_summary(summary) == (
            "Palm Width: 84.46 mm (Medium)",
            "Palm Length: 101.00 mm (Large)",
        )


class TestHistoryTable:
    def test_rows(self):
        rows = format_history_rows([_record()])
        assert rows == [
            ("14:07:09", "270.00", "170.10", "128.00", "52.76", "Small", "96.00", "N/A", "N/A"),
        ]
        assert len(rows[0]) == len(HISTORY_COLUMNS)

    def test_empty_table(self):
        assert format_history_table([]) == NO_HISTORY_MESSAGE

    def test_table_layout(self):
        table = format_history_table([_record(), _record(palm_width_mm=None, palm_width_class=SizeClass.NOT_AVAILABLE)])
        lines = table.splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("Timestamp")
        assert set(lines[1]) <= {"-", "+"}
        assert "52.76" in lines[2]
        assert "52.76" not in lines[3]
        assert "Small" in lines[2]


class TestSinks:
    def test_recording_sink(self):
        sink = RecordingSink()
        summary = AggregateSummary(record_count=1)
        history = [make_record(10.0)]
        sink.publish(summary, history)
        assert sink.summary is summary
        assert sink.history == tuple(history)
        assert sink.publish_count == 1

    def test_logging_sink_logs_on_change_only(self, caplog):
        sink = LoggingSink()
        with caplog.at_level(logging.INFO, logger="palmsizer.display"):
            sink.publish(AggregateSummary(), [])
            sink.publish(AggregateSummary(), [])
            sink.publish(AggregateSummary(palm_width_mm=70.0, palm_width_class=SizeClass.SMALL, record_count=1), [])

        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 2
        assert "Palm Width: Not detected" in messages[0]
        assert "Palm Width: 70.00 mm (Small)" in messages[1]
