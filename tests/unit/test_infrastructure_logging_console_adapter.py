"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- All LoggerProtocol methods (debug, info, warning, error, critical)
- Exception details on error/critical
- Context binding
- Renderer and level selection

Architecture:
- Unit tests with mocked structlog
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from capgate.infrastructure.logging.console_adapter import ConsoleAdapter

STRUCTLOG = "capgate.infrastructure.logging.console_adapter.structlog"


@pytest.fixture
def mock_structlog():
    with patch(STRUCTLOG) as mock_structlog:
        mock_structlog.get_logger.return_value = MagicMock()
        yield mock_structlog


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    @pytest.mark.parametrize("method", ["debug", "info", "warning"])
    def test_forwards_message_and_context(self, mock_structlog, method):
        adapter = ConsoleAdapter()

        getattr(adapter, method)("resource_loaded", resource_id="r1")

        getattr(mock_structlog.get_logger.return_value, method).assert_called_once_with(
            "resource_loaded", resource_id="r1"
        )

    def test_error_without_exception(self, mock_structlog):
        adapter = ConsoleAdapter()

        adapter.error("action_handler_failed", cause="boom")

        mock_structlog.get_logger.return_value.error.assert_called_once_with(
            "action_handler_failed", cause="boom"
        )

    def test_error_with_exception(self, mock_structlog):
        adapter = ConsoleAdapter()

        adapter.error("action_handler_raised", error=ValueError("bad row"))

        mock_structlog.get_logger.return_value.error.assert_called_once_with(
            "action_handler_raised",
            error_type="ValueError",
            error_message="bad row",
        )

    def test_critical_with_exception(self, mock_structlog):
        adapter = ConsoleAdapter()

        adapter.critical("store_lost", error=ConnectionError("refused"))

        mock_structlog.get_logger.return_value.critical.assert_called_once_with(
            "store_lost",
            error_type="ConnectionError",
            error_message="refused",
        )


@pytest.mark.unit
class TestConsoleAdapterBinding:
    """Test bind()."""

    def test_bind_returns_new_adapter(self, mock_structlog):
        base_logger = mock_structlog.get_logger.return_value
        bound_logger = MagicMock()
        base_logger.bind.return_value = bound_logger
        adapter = ConsoleAdapter()

        bound = adapter.bind(resource_id="r1")
        bound.info("action_executed")

        assert bound is not adapter
        base_logger.bind.assert_called_once_with(resource_id="r1")
        bound_logger.info.assert_called_once_with("action_executed")
        base_logger.info.assert_not_called()


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    """Test structlog configuration."""

    def test_json_renderer(self, mock_structlog):
        ConsoleAdapter(use_json=True)

        processors = mock_structlog.configure.call_args.kwargs["processors"]
        assert processors[-1] is mock_structlog.processors.JSONRenderer.return_value
        assert mock_structlog.contextvars.merge_contextvars in processors

    def test_console_renderer(self, mock_structlog):
        ConsoleAdapter(use_json=False)

        processors = mock_structlog.configure.call_args.kwargs["processors"]
        assert processors[-1] is mock_structlog.dev.ConsoleRenderer.return_value

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("bogus", logging.INFO)],
    )
    def test_min_level(self, mock_structlog, level, expected):
        ConsoleAdapter(level=level)

        mock_structlog.make_filtering_bound_logger.assert_called_once_with(expected)
