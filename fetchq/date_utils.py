from __future__ import annotations

import re
from datetime import timedelta
from typing import Optional

DURATION_PART = re.compile(r"(?P<value>\d+(?:\.\d+)?)(?P<unit>h|ms|m|s)")

UNIT_SECONDS = {
    "h": 3600.0,
    "m": 60.0,
    "s": 1.0,
    "ms": 0.001,
}


def parse_duration(value: str) -> Optional[timedelta]:
    """Parse a duration like ``24h``, ``1h30m`` or ``90s``.

    Returns None for an empty string. A bare ``0`` needs no unit. Raises
    ValueError on anything else that does not consist solely of number+unit
    parts.
    """
    value = value.strip()
    if not value:
        return None
    if value == "0":
        return timedelta(0)
    pos = 0
    seconds = 0.0
    for match in DURATION_PART.finditer(value):
        if match.start() != pos:
            break
        seconds += float(match.group("value")) * UNIT_SECONDS[match.group("unit")]
        pos = match.end()
    if pos != len(value):
        raise ValueError(f"invalid duration: {value!r}")
    return timedelta(seconds=seconds)


def format_duration(delta: Optional[timedelta]) -> str:
    """Format a duration as hours, minutes and seconds, e.g. ``48h0m0s``.

    None formats as an empty string.
    """
    if delta is None:
        return ""
    total = int(delta.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"
