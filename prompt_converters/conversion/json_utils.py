"""JSON helpers shared by the provider adapters."""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def try_parse(value: Any) -> Any:
    """Parse a JSON string, returning the input unchanged on failure.

    Tool-call arguments arrive as JSON strings produced by models and are
    not guaranteed to be valid; providers tolerate an opaque string far
    better than a conversion that aborts halfway.
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        logger.debug("Passing through non-JSON tool arguments unchanged")
        return value


def dumps_compact(value: Any) -> str:
    """Serialize without whitespace between separators."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
