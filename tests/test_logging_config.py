"""Tests for structured logging."""

import json
import logging

import pytest

from aquamap.logging_config import (
    JSONFormatter,
    MapContextAdapter,
    get_logger,
    location_label,
    setup_logging,
)


def make_record(**context) -> logging.LogRecord:
    record = logging.LogRecord(
        name="aquamap.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Weather advisory: %s",
        args=("loaded",),
        exc_info=None,
    )
    record.created = 1717221600.0
    for key, value in context.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSON log output."""

    def test_formats_location(self) -> None:
        data = json.loads(JSONFormatter().format(make_record(location="34.1688,74.8619")))

        assert data["level"] == "INFO"
        assert data["message"] == "Weather advisory: loaded"
        assert data["location"] == "34.1688,74.8619"
        assert "notification_id" not in data

    def test_timestamp_comes_from_record(self) -> None:
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["timestamp"] == "2024-06-01T06:00:00+00:00"

    def test_unknown_attributes_are_not_copied(self) -> None:
        data = json.loads(JSONFormatter().format(make_record(request_id="req-1")))

        assert "request_id" not in data


class TestGetLogger:
    """Tests for the context adapter."""

    def test_adapter_carries_location(self) -> None:
        adapter = get_logger("aquamap.test", location="Dal Lake")

        msg, kwargs = adapter.process("hello", {})

        assert isinstance(adapter, MapContextAdapter)
        assert msg == "hello"
        assert kwargs["extra"] == {"location": "Dal Lake"}

    def test_adapter_carries_notification_id(self) -> None:
        adapter = get_logger("aquamap.test", notification_id="1717221600000-1")

        _, kwargs = adapter.process("hello", {"extra": {"location": "Mumbai Port"}})

        assert kwargs["extra"] == {
            "notification_id": "1717221600000-1",
            "location": "Mumbai Port",
        }

    def test_location_label(self) -> None:
        assert location_label(20.5937, 78.9629) == "20.5937,78.9629"

    def test_context_reaches_json_output(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="aquamap.test"):
            get_logger("aquamap.test", notification_id="n-1").info("Evicted")

        data = json.loads(JSONFormatter().format(caplog.records[0]))
        assert data["notification_id"] == "n-1"


class TestSetupLogging:
    """Tests for root logger configuration."""

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError):
            setup_logging("LOUD")
