import logging
import math
import re
from datetime import timedelta
from typing import Any, Optional

_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
}

_PART_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(ms|s|m|h|d)")


def _seconds(seconds: float) -> Optional[timedelta]:
    """timedelta from seconds, or None when the value is not finite or out of range."""
    if not math.isfinite(seconds):
        return None
    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        logging.debug("Duration out of range: %s seconds", seconds)
        return None


def parse_duration(value: Any) -> Optional[timedelta]:
    """Parse a period given as seconds, a "1h30m"-style string or a {secs, nanos} mapping.

    Returns None if the value cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        try:
            return _seconds(float(value))
        except OverflowError:
            logging.debug("Duration out of range: %s", value)
            return None
    if isinstance(value, dict):
        try:
            secs = value.get("secs", 0)
            nanos = value.get("nanos", 0)
            return _seconds(float(secs) + float(nanos) / 1e9)
        except (TypeError, ValueError, OverflowError):
            logging.debug("Could not parse duration mapping: %s", value)
            return None
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return None
        try:
            seconds = float(text)
        except ValueError:
            pass
        else:
            return _seconds(seconds)
        pos = 0
        total = 0.0
        for match in _PART_RE.finditer(text):
            if text[pos:match.start()].strip():
                break
            total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
            pos = match.end()
        if pos == 0 or text[pos:].strip():
            logging.debug("Could not parse duration string: %s", value)
            return None
        return _seconds(total)
    return None
