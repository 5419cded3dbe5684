"""
Time formatting and lenient parsing of operator input.
"""

import math
import re

# Leading decimal number, as typed into a time field ("12.5", "12.5s", " .75")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_seconds(text: str | float | int | None) -> float | None:
    """
    Parse a typed time value in seconds.

    The leading number is used and trailing characters ignored; text that
    does not start with a number returns None.
    """
    if text is None:
        return None
    if isinstance(text, (int, float)):
        value = float(text)
        return value if math.isfinite(value) else None

    match = _LEADING_FLOAT.match(text)
    if not match:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def parse_int(text: str | int | None, default: int = 0) -> int:
    """Parse the leading integer of ``text``; ``default`` if there is none."""
    if text is None:
        return default
    if isinstance(text, int):
        return text
    match = _LEADING_INT.match(str(text))
    if not match:
        return default
    return int(match.group(1))


def format_time(seconds: float) -> str:
    """Format seconds as m:ss.cc (e.g. 75.5 -> "1:15.50")."""
    minutes = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    hundredths = math.floor((seconds % 1) * 100)
    return f"{minutes}:{secs:02d}.{hundredths:02d}"
