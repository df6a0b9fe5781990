"""Unit tests for model response logging."""

import json
import logging
from unittest.mock import MagicMock, patch

import structlog

from tests.fixtures.mock_responses import make_response
from utils.response_logger import (
    _truncate_large_values,
    configure_logging,
    log_raw_response,
    response_to_dict,
)


class TestResponseLogger:
    """Tests for response logging helpers."""

    def test_response_to_dict_from_sdk_object(self):
        data = response_to_dict(make_response("hello"))

        assert data["candidates"][0]["content"]["parts"][0]["text"] == "hello"

    def test_response_to_dict_passes_dicts_through(self):
        assert response_to_dict({"a": 1}) == {"a": 1}

    def test_truncate_nested_values(self):
        data = {"outer": [{"text": "x" * 30}], "short": "ok"}

        result = _truncate_large_values(data, max_length=10)

        assert result["short"] == "ok"
        assert result["outer"][0]["text"].startswith("x" * 10 + "... [truncated 20 chars]")

    def test_log_raw_response(self):
        with patch("utils.response_logger.logger") as mock_logger:
            log_raw_response("gemini_empty_response", make_response(None), operation="rehab estimate")

        args, kwargs = mock_logger.error.call_args
        assert args == ("gemini_empty_response",)
        assert kwargs["operation"] == "rehab estimate"
        assert "candidates" in json.loads(kwargs["raw_response"])

    def test_configure_logging_accepts_unknown_level(self):
        configure_logging("verbose")
        configure_logging("DEBUG", json_output=True)
        structlog.reset_defaults()

    def test_configure_logging_defaults_to_settings_level(self):
        with patch("utils.response_logger.settings") as mock_settings, \
                patch("utils.response_logger.structlog.make_filtering_bound_logger",
                      return_value=MagicMock()) as mock_filter:
            mock_settings.log_level = "warning"
            configure_logging()

        structlog.reset_defaults()
        mock_filter.assert_called_once_with(logging.WARNING)

    def test_explicit_level_overrides_settings(self):
        with patch("utils.response_logger.settings") as mock_settings, \
                patch("utils.response_logger.structlog.make_filtering_bound_logger",
                      return_value=MagicMock()) as mock_filter:
            mock_settings.log_level = "WARNING"
            configure_logging("DEBUG")

        structlog.reset_defaults()
        mock_filter.assert_called_once_with(logging.DEBUG)
