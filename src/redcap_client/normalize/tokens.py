"""Split delimited filter strings into tokens and join token lists back."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

DEFAULT_DELIMITERS: tuple[str, ...] = (",", " ")


def normalize_delimiters(delimiters: Iterable[str] | None) -> tuple[str, ...]:
    """Return the delimiter characters to split on; empty input means the defaults."""
    chars: list[str] = []
    for delimiter in delimiters or ():
        for char in delimiter:
            if char not in chars:
                chars.append(char)
    return tuple(chars) or DEFAULT_DELIMITERS


def extract_tokens(raw: str | None, delimiters: Iterable[str] | None = None) -> list[str]:
    """Split ``raw`` on any delimiter character, dropping empty fragments.

    Example: ``"firstName, lastName, age"`` with the default delimiters gives
    ``["firstName", "lastName", "age"]``. Never raises; a fault is logged and
    yields an empty list.
    """
    if not raw:
        return []
    try:
        chars = normalize_delimiters(delimiters)
        pattern = "[" + "".join(re.escape(c) for c in chars) + "]"
        return [fragment for fragment in re.split(pattern, raw) if fragment]
    except (TypeError, re.error) as exc:
        logger.error("Could not extract tokens from %r: %s", raw, exc)
        return []


def join_tokens(items: Sequence[str | int] | None) -> str:
    """Join tokens with commas for transmission: ``["a", "b"]`` -> ``"a,b"``."""
    if not items:
        return ""
    if len(items) == 1:
        return str(items[0])
    return ",".join(str(item) for item in items)
