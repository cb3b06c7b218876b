"""
Input normalization: raw text to a JSON tree, with one unescape retry.
"""

import json
from typing import Any, Optional

import structlog
from pydantic import BaseModel

from .context import FailureKind, WarningCollector

logger = structlog.get_logger()

# Applied in order, each exactly once over the whole text
UNESCAPE_SEQUENCE = (
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ('\\"', '"'),
    ("\\\\", "\\"),
)


class NormalizedInput(BaseModel):
    """Outcome of normalization; ``tree`` is only meaningful when ``parsed``."""

    tree: Any = None
    parsed: bool = False
    unescaped: bool = False


def unescape(text: str) -> str:
    """Undo one level of string escaping (newline, CR, tab, quote, backslash)."""
    for escaped, plain in UNESCAPE_SEQUENCE:
        text = text.replace(escaped, plain)
    return text


def normalize_json(text: Optional[str], warnings: WarningCollector) -> NormalizedInput:
    """Parse ``text``; on failure unescape it and try exactly once more.

    Empty or blank text is not an error and is not parsed at all. A second
    parse failure records one warning and returns an unparsed result.
    """
    if text is None or not text.strip():
        return NormalizedInput()

    try:
        return NormalizedInput(tree=json.loads(text), parsed=True)
    except (json.JSONDecodeError, RecursionError) as first_error:
        logger.debug("JSON parse failed, retrying unescaped", error=str(first_error))

    try:
        return NormalizedInput(tree=json.loads(unescape(text)), parsed=True, unescaped=True)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.debug("Unescaped JSON parse failed", error=str(e))
        warnings.add(f"Could not deserialize {text}", FailureKind.PARSE_FAILURE)
        return NormalizedInput()
