"""Unit tests for ConsoleAdapter.

Tests cover:
- Structured entries (event name, level, context)
- Exception details on error()
- Bound context
- Level filtering
"""

import pytest
from structlog.testing import capture_logs

from src.infrastructure.logging.console_adapter import ConsoleAdapter


@pytest.mark.unit
class TestConsoleAdapter:
    """Test the structlog console logger."""

    def test_info_entry_carries_context(self):
        logger = ConsoleAdapter(use_json=True, level="DEBUG")

        with capture_logs() as logs:
            logger.info("user_created", user_id="u-1")

        assert logs == [{"event": "user_created", "log_level": "info", "user_id": "u-1"}]

    def test_error_adds_exception_details(self):
        logger = ConsoleAdapter(use_json=True, level="DEBUG")

        with capture_logs() as logs:
            logger.error("unhandled_exception", error=ValueError("bad value"))

        assert logs[0]["error_type"] == "ValueError"
        assert logs[0]["error_message"] == "bad value"
        assert logs[0]["log_level"] == "error"

    def test_bind_returns_new_adapter_with_context(self):
        logger = ConsoleAdapter(use_json=True, level="DEBUG")
        bound = logger.bind(trace_id="trace-1")

        with capture_logs() as logs:
            bound.warning("impersonation_session_rejected", end_reason="timeout")

        assert bound is not logger
        assert logs[0]["trace_id"] == "trace-1"
        assert logs[0]["end_reason"] == "timeout"

    def test_entries_below_level_are_dropped(self):
        logger = ConsoleAdapter(use_json=True, level="WARNING")

        with capture_logs() as logs:
            logger.info("user_authenticated")
            logger.warning("event_handler_failed")

        assert [entry["event"] for entry in logs] == ["event_handler_failed"]
