"""Timestamp formatters used by ``%d{...}`` pieces.

Two pattern vocabularies are supported:

- ``strftime``: ``datetime.strftime`` directives (``%Y-%m-%d %H:%M:%S``).
- ``reference``: the pattern is written as the reference moment
  ``Mon Jan 2 15:04:05 MST 2006`` would look (``2006-01-02 15:04:05``).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Protocol

from ..config import DATE_STYLES

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Longest alternatives first.
_REFERENCE_RE = re.compile(
    r"January|Jan|Monday|Mon|MST|2006"
    r"|Z07:00|Z0700|Z07|-07:00|-0700|-07"
    r"|\.0+(?!\d)|\.9+(?!\d)"
    r"|_2|01|02|03|04|05|06|15|PM|pm|1|2|3|4|5"
)


class TimestampFormatter(Protocol):
    def __call__(self, ts: datetime, pattern: str) -> str: ...


def format_strftime(ts: datetime, pattern: str) -> str:
    """Format with ``datetime.strftime`` directives."""
    return ts.strftime(pattern)


def _offset(ts: datetime) -> tuple[str, int, int]:
    """Return (sign, hours, minutes) of the UTC offset; naive counts as UTC."""
    off = ts.utcoffset() or timedelta(0)
    sign = "-" if off < timedelta(0) else "+"
    total = abs(int(off.total_seconds())) // 60
    return sign, total // 60, total % 60


def _zone(ts: datetime, token: str) -> str:
    sign, hh, mm = _offset(ts)
    if token.startswith("Z") and hh == 0 and mm == 0:
        return "Z"
    token = token[1:]
    if token == "07:00":
        return f"{sign}{hh:02d}:{mm:02d}"
    if token == "0700":
        return f"{sign}{hh:02d}{mm:02d}"
    return f"{sign}{hh:02d}"


def _zone_name(ts: datetime) -> str:
    """Zone abbreviation, or a numeric offset when the zone has none."""
    name = ts.tzname() or "UTC"
    if name.startswith("UTC") and name != "UTC":
        return _zone(ts, "-0700")
    return name


def _fraction(ts: datetime, token: str) -> str:
    digits = f"{ts.microsecond * 1000:09d}"[: len(token) - 1]
    if token[1] == "0":
        return "." + digits
    digits = digits.rstrip("0")
    return "." + digits if digits else ""


_REFERENCE_TOKENS: dict[str, Callable[[datetime], str]] = {
    "January": lambda ts: _MONTHS[ts.month - 1],
    "Jan": lambda ts: _MONTHS[ts.month - 1][:3],
    "Monday": lambda ts: _WEEKDAYS[ts.weekday()],
    "Mon": lambda ts: _WEEKDAYS[ts.weekday()][:3],
    "MST": _zone_name,
    "2006": lambda ts: f"{ts.year:04d}",
    "06": lambda ts: f"{ts.year % 100:02d}",
    "01": lambda ts: f"{ts.month:02d}",
    "1": lambda ts: str(ts.month),
    "02": lambda ts: f"{ts.day:02d}",
    "_2": lambda ts: f"{ts.day:>2d}",
    "2": lambda ts: str(ts.day),
    "15": lambda ts: f"{ts.hour:02d}",
    "03": lambda ts: f"{ts.hour % 12 or 12:02d}",
    "3": lambda ts: str(ts.hour % 12 or 12),
    "04": lambda ts: f"{ts.minute:02d}",
    "4": lambda ts: str(ts.minute),
    "05": lambda ts: f"{ts.second:02d}",
    "5": lambda ts: str(ts.second),
    "PM": lambda ts: "PM" if ts.hour >= 12 else "AM",
    "pm": lambda ts: "pm" if ts.hour >= 12 else "am",
}


@lru_cache(maxsize=256)
def _split_reference(pattern: str) -> tuple[tuple[bool, str], ...]:
    """Split a reference layout into (is_token, text) chunks."""
    chunks: list[tuple[bool, str]] = []
    pos = 0
    for m in _REFERENCE_RE.finditer(pattern):
        if m.start() > pos:
            chunks.append((False, pattern[pos : m.start()]))
        chunks.append((True, m.group(0)))
        pos = m.end()
    if pos < len(pattern):
        chunks.append((False, pattern[pos:]))
    return tuple(chunks)


def _render_token(ts: datetime, token: str) -> str:
    if token[0] in "Z-":
        return _zone(ts, token)
    if token[0] == ".":
        return _fraction(ts, token)
    return _REFERENCE_TOKENS[token](ts)


def format_reference(ts: datetime, pattern: str) -> str:
    """Format with a reference-time layout such as ``2006-01-02T15:04:05Z07:00``."""
    return "".join(
        _render_token(ts, text) if is_token else text
        for is_token, text in _split_reference(pattern)
    )


def get_timestamp_formatter(style: str) -> TimestampFormatter:
    """Return the formatter for a date style name."""
    if style == "strftime":
        return format_strftime
    if style == "reference":
        return format_reference
    valid = ", ".join(DATE_STYLES)
    raise ValueError(f"Unknown date style '{style}'. Valid values: {valid}.")
