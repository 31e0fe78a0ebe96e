from __future__ import annotations

from datetime import datetime

UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_bytes(size: int) -> str:
    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{int(value)} {UNITS[unit]}"
    return f"{value:.1f} {UNITS[unit]}"


def format_time(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime(TIME_FORMAT)


def last_segment(value: str, sep: str = "/") -> str:
    return value.rsplit(sep, 1)[-1]
