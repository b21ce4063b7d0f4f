from __future__ import annotations

from datetime import time

import pytest

from facility_console.domain.office_hours import (
    TICKS_PER_DAY,
    decode_office_hours,
    encode_office_hours,
    ticks_to_time,
    time_to_ticks,
)

NINE_AM_TICKS = 9 * 3600 * 1000 * 10_000
FIVE_PM_TICKS = 17 * 3600 * 1000 * 10_000


def test_time_to_ticks_counts_hundred_nanosecond_units() -> None:
    assert time_to_ticks(time(9, 0)) == NINE_AM_TICKS
    assert time_to_ticks(time(17, 0)) == FIVE_PM_TICKS
    assert time_to_ticks(time(0, 0, 0, 1500)) == 10_000


def test_encode_requires_both_times() -> None:
    assert encode_office_hours(time(9, 0), time(17, 0)) == (NINE_AM_TICKS, FIVE_PM_TICKS)
    assert encode_office_hours(time(9, 0), None) == (0, 0)
    assert encode_office_hours(None, time(17, 0)) == (0, 0)
    assert encode_office_hours(None, None) == (0, 0)


def test_midnight_encodes_to_zero() -> None:
    assert time_to_ticks(time(0, 0)) == 0


def test_decode_returns_none_pair_when_either_side_is_zero() -> None:
    assert decode_office_hours(0, FIVE_PM_TICKS) == (None, None)
    assert decode_office_hours(NINE_AM_TICKS, 0) == (None, None)


def test_decode_round_trips_to_millisecond_resolution() -> None:
    begin = time(8, 30, 15, 250_000)
    end = time(18, 45)
    encoded = encode_office_hours(begin, end)

    assert decode_office_hours(*encoded) == (begin, end)


def test_ticks_to_time_rejects_out_of_range_values() -> None:
    with pytest.raises(ValueError):
        ticks_to_time(-1)
    with pytest.raises(ValueError):
        ticks_to_time(TICKS_PER_DAY)

