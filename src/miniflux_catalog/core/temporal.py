"""Loose time input -> unix seconds."""

import math
import re
from datetime import timezone
from typing import Optional

from dateutil import parser as date_parser

from miniflux_catalog.core.entities import TimeValue

# Anything above this is taken to be unix milliseconds.
MILLISECONDS_THRESHOLD = 10**12

_DIGITS = re.compile(r"[0-9]+")


def normalize_time(value: TimeValue) -> Optional[int]:
    """
    Convert a time filter value to unix seconds.

    Accepts unix seconds, unix milliseconds (numbers or digit-only strings)
    and calendar date/time strings. Naive date/times are read as UTC.

    Returns:
        Unix seconds, or None when the value is empty or cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return _from_number(value)

    text = str(value).strip()
    if not text:
        return None

    if _DIGITS.fullmatch(text):
        return _from_number(int(text))

    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return math.floor(parsed.timestamp())


def _from_number(value: float) -> Optional[int]:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value > MILLISECONDS_THRESHOLD:
        return math.floor(value / 1000)
    return math.floor(value)
