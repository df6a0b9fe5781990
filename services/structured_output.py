"""Fenced JSON extraction for model responses.

The investment analysis prompt asks for a single JSON object inside a
```json fenced block. Only the first block is read; later blocks are ignored.
"""

import json
import re
from typing import Any, Dict

import structlog

from config.errors import MissingStructuredBlockError, MalformedStructuredBlockError

logger = structlog.get_logger(__name__)

JSON_BLOCK_PATTERN = re.compile(r"```json\n([\s\S]*?)\n```")


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name!r}")


def extract_json_block(text: str) -> Dict[str, Any]:
    """Parse the first ```json fenced block in text.

    Args:
        text: Raw model response text.

    Returns:
        The parsed JSON object.

    Raises:
        MissingStructuredBlockError: No fenced json block in text.
        MalformedStructuredBlockError: Block is not valid JSON or not an object.
    """
    match = JSON_BLOCK_PATTERN.search(text or "")
    if not match or not match.group(1):
        logger.error("structured_block_missing", raw_text=text)
        raise MissingStructuredBlockError(details={"text_length": len(text or "")})

    block = match.group(1)
    try:
        parsed = json.loads(block, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error(
            "structured_block_malformed",
            parse_error=str(e),
            raw_text=text
        )
        raise MalformedStructuredBlockError(
            reason=f"invalid JSON: {e}",
            raw_text=text
        ) from e

    if not isinstance(parsed, dict):
        logger.error(
            "structured_block_malformed",
            parse_error=f"expected object, got {type(parsed).__name__}",
            raw_text=text
        )
        raise MalformedStructuredBlockError(
            reason=f"expected a JSON object, got {type(parsed).__name__}",
            raw_text=text
        )

    return parsed
