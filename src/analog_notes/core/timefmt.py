from __future__ import annotations

import math
import re

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _split_minutes(decimal_minutes: float) -> tuple[int, int]:
    minutes = math.floor(decimal_minutes)
    seconds = math.floor((decimal_minutes - minutes) * 60 + 0.5)  # half up
    if seconds == 60:
        minutes += 1
        seconds = 0
    return minutes, seconds


def _is_missing(value: float | None) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def format_time_for_display(decimal_minutes: float | None) -> str:
    """1.5 -> '1m 30s'. Missing values format as ''."""
    if _is_missing(decimal_minutes):
        return ""
    minutes, seconds = _split_minutes(decimal_minutes)
    return f"{minutes}m {seconds}s"


def decimal_minutes_to_min_sec(decimal_minutes: float | None) -> str:
    """1.5 -> '1:30'."""
    if _is_missing(decimal_minutes):
        return ""
    minutes, seconds = _split_minutes(decimal_minutes)
    return f"{minutes}:{seconds:02d}"


def _parse_int(s: str) -> int | None:
    # leading integer prefix: "3x" -> 3, "1.5" -> 1
    m = _LEADING_INT.match(s)
    return int(m.group(1)) if m else None


def min_sec_to_decimal_minutes(min_sec: str | None) -> float:
    """'1:30' -> 1.5. Blank or malformed input gives 0."""
    if not min_sec or not min_sec.strip():
        return 0.0
    parts = min_sec.split(":")
    if len(parts) != 2:
        return 0.0
    minutes = _parse_int(parts[0]) or 0
    seconds = _parse_int(parts[1]) or 0
    return minutes + seconds / 60


def is_valid_min_sec(min_sec: str | None) -> bool:
    if not min_sec or not min_sec.strip():
        return False
    parts = min_sec.split(":")
    if len(parts) != 2:
        return False
    minutes = _parse_int(parts[0])
    seconds = _parse_int(parts[1])
    if minutes is None or seconds is None:
        return False
    return minutes >= 0 and 0 <= seconds < 60
