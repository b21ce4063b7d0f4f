"""Office open/close times travel as .NET-style ticks since local midnight.

One tick is 100 ns, so one millisecond is 10 000 ticks. Encoding truncates
below the millisecond; decoding back recovers the wall-clock value to that
resolution.
"""
from __future__ import annotations

from datetime import time

TICKS_PER_MILLISECOND = 10_000
MILLISECONDS_PER_DAY = 24 * 60 * 60 * 1000
TICKS_PER_DAY = MILLISECONDS_PER_DAY * TICKS_PER_MILLISECOND


def milliseconds_since_midnight(value: time) -> int:
    seconds = value.hour * 3600 + value.minute * 60 + value.second
    return seconds * 1000 + value.microsecond // 1000


def time_to_ticks(value: time) -> int:
    return milliseconds_since_midnight(value) * TICKS_PER_MILLISECOND


def ticks_to_time(ticks: int) -> time:
    if ticks < 0 or ticks >= TICKS_PER_DAY:
        raise ValueError(f"ticks out of day range: {ticks}")
    ms = ticks // TICKS_PER_MILLISECOND
    seconds, millis = divmod(ms, 1000)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return time(hour, minute, second, millis * 1000)


def encode_office_hours(begin: time | None, end: time | None) -> tuple[int, int]:
    # all-or-nothing: a half-filled range is sent as "no hours"
    if begin is None or end is None:
        return 0, 0
    return time_to_ticks(begin), time_to_ticks(end)


def decode_office_hours(begin_ticks: int, end_ticks: int) -> tuple[time | None, time | None]:
    if not begin_ticks or not end_ticks:
        return None, None
    return ticks_to_time(begin_ticks), ticks_to_time(end_ticks)
