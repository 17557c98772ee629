"""
Input boundary for the explorer.

Turns pasted text into a Document (plain ``dict``/``list``/scalar values
as produced by :mod:`json`) and offers the small set of type helpers the
rest of the package walks documents with.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator, Optional, Union

logger = logging.getLogger(__name__)

Segment = Union[str, int]


class InvalidJsonError(ValueError):
    """Raised when the pasted text is not a single valid JSON document."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def parse_document(text: Optional[str]) -> Any:
    """
    Parse raw text into a Document.

    Args:
        text: The pasted text. Blank or whitespace-only text means
              "nothing pasted yet".

    Returns:
        The parsed value, or None for blank input. Note that a valid
        ``null`` document also parses to None; callers that need to tell
        the two apart should check ``text.strip()`` first.

    Raises:
        InvalidJsonError: The text is not valid JSON. The message carries
            the underlying parser's description verbatim.
    """
    if text is None or not text.strip():
        return None
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning("Rejected input (%s: %s)", type(e).__name__, e)
        raise InvalidJsonError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        logger.warning("Rejected input (nested too deeply)")
        raise InvalidJsonError("Invalid JSON: document nested too deeply") from e


def describe_type(v: Any) -> str:
    if v is None:
        return "null"
    if isinstance(v, list):
        return "array"
    if isinstance(v, dict):
        return "object"
    if isinstance(v, bool):
        return "boolean"
    if isinstance(v, (int, float)):
        return "number"
    if isinstance(v, str):
        return "string"
    return type(v).__name__


def is_container(v: Any) -> bool:
    return isinstance(v, (dict, list))


def iter_entries(container: Any) -> Iterator[tuple[Segment, Any]]:
    """Yield ``(segment, child)`` pairs of an object or array, in order."""
    if isinstance(container, dict):
        yield from container.items()
    elif isinstance(container, list):
        yield from enumerate(container)
