"""Lenient query parameter parsing.

Listing endpoints never reject malformed paging or filter parameters;
bad values fall back to defaults or are ignored.
"""

import re

# Optional sign and ASCII digits only; no whitespace or underscores
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def optional_int(value: str | None) -> int | None:
    """Parse an optional integer filter, ignoring anything unparsable."""
    if value is None or not INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def positive_int(value: str | None, default: int) -> int:
    """Parse a positive integer, falling back to ``default``."""
    parsed = optional_int(value)
    if parsed is None or parsed < 1:
        return default
    return parsed


def flag(value: str | None) -> bool:
    """A flag is set only by the literal string "true"."""
    return value == "true"
