"""Model response logging for Rehab Estimator.

Serializes raw Gemini responses for operator diagnostics and configures
structlog for host applications.
"""

import json
import logging
from typing import Any, Dict, Optional

import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)

MAX_VALUE_LENGTH = 2000


def _format_json(data: Any, indent: int = 2) -> str:
    """Format data as pretty JSON string."""
    try:
        return json.dumps(data, indent=indent, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(data)


def _truncate_large_values(data: Any, max_length: int = MAX_VALUE_LENGTH) -> Any:
    """Truncate large string values for display purposes."""
    if isinstance(data, str) and len(data) > max_length:
        return data[:max_length] + f"... [truncated {len(data) - max_length} chars]"
    if isinstance(data, dict):
        return {key: _truncate_large_values(value, max_length) for key, value in data.items()}
    if isinstance(data, list):
        return [_truncate_large_values(item, max_length) for item in data]
    return data


def response_to_dict(response: Any) -> Dict[str, Any]:
    """Best-effort plain dict view of an SDK response object."""
    if isinstance(response, dict):
        return response
    if hasattr(response, "model_dump"):
        return response.model_dump(mode="json", exclude_none=True)
    return {"repr": repr(response)}


def log_raw_response(event: str, response: Any, **context: Any) -> None:
    """Log a full raw model response at error level.

    Inline image bytes are not part of responses, so the full body is kept;
    only individual string values above MAX_VALUE_LENGTH are shortened.
    """
    body = _truncate_large_values(response_to_dict(response))
    logger.error(event, raw_response=_format_json(body), **context)


def configure_logging(level: Optional[str] = None, json_output: bool = False) -> None:
    """Configure structlog for the host process.

    Args:
        level: Standard logging level name (e.g., "INFO", "DEBUG").
            Defaults to settings.log_level (LOG_LEVEL).
        json_output: Render JSON lines instead of the console renderer.
    """
    log_level = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=False,
    )
