# wspcheck/schema/duration.py
"""
Single-unit duration tokens as used in storage-schemas.conf,
e.g. 300 -> "5m", 3600 -> "1h", 86400 -> "1d", 31536000 -> "1y".
"""
from __future__ import annotations

import re

from .errors import InvalidDuration

MULTIPLIERS = {
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "y": 31536000,
}

# plain integers only: no blanks or underscores inside the number
_NUMBER = re.compile(r"[+-]?[0-9]+")

# largest first; seconds is the fallback
_UNITS = [
    (31536000, "y"),
    (86400, "d"),
    (3600, "h"),
    (60, "m"),
]


def to_human(seconds: int) -> str:
    """
    Render seconds using the largest unit that divides it exactly.
    The original unit is not preserved: "3600s" comes back as "1h".
    """
    if seconds == 0:
        return "0s"
    for size, symbol in _UNITS:
        if seconds % size == 0:
            return f"{seconds // size}{symbol}"
    return f"{seconds}s"


def from_human(token: str) -> int:
    s = (token or "").strip()
    if not s:
        raise InvalidDuration("empty duration")
    unit, num = s[-1].lower(), s[:-1]
    if not _NUMBER.fullmatch(num):
        raise InvalidDuration(f"invalid numeric duration in {s!r}")
    if unit not in MULTIPLIERS:
        raise InvalidDuration(f"unknown duration unit {s[-1]!r} in {s!r}")
    return int(num) * MULTIPLIERS[unit]
