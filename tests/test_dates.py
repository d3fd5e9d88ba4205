from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from danclean.dates import (
    InvalidTimeZoneError,
    date_string_to_utc_range,
    get_current_date,
    utc_date_to_local_date_string,
)


@pytest.mark.parametrize("zone", ["America/Monterrey", "Asia/Tokyo", "UTC"])
def test_current_date_is_local_midnight_of_today(zone):
    result = get_current_date(zone)
    now_local = datetime.now(ZoneInfo(zone))

    assert (result.hour, result.minute, result.second, result.microsecond) == (0, 0, 0, 0)
    # Tolerate a call that straddles local midnight.
    assert result.date() in {now_local.date(), (now_local - timedelta(minutes=1)).date()}
    assert result.utcoffset() == ZoneInfo(zone).utcoffset(result)


def test_current_date_follows_zone_not_utc():
    now = datetime(2024, 3, 10, 3, 30, tzinfo=timezone.utc)

    monterrey = get_current_date("America/Monterrey", now=now)
    tokyo = get_current_date("Asia/Tokyo", now=now)

    assert monterrey.isoformat() == "2024-03-09T00:00:00-06:00"
    assert tokyo.isoformat() == "2024-03-10T00:00:00+09:00"


def test_current_date_is_stable_within_a_day():
    morning = datetime(2024, 6, 1, 13, 0, tzinfo=timezone.utc)
    evening = datetime(2024, 6, 2, 5, 0, tzinfo=timezone.utc)
    assert get_current_date("America/Monterrey", now=morning) == get_current_date("America/Monterrey", now=evening)


def test_current_date_rejects_naive_clock():
    with pytest.raises(ValueError):
        get_current_date("UTC", now=datetime(2024, 1, 1))


@pytest.mark.parametrize("zone", ["Mars/Olympus_Mons", "not a zone"])
def test_unknown_zone_fails_fast(zone):
    with pytest.raises(InvalidTimeZoneError):
        get_current_date(zone)


def test_local_day_to_utc_range():
    start, end = date_string_to_utc_range("2024-01-15", "America/Monterrey")

    assert start == datetime(2024, 1, 15, 6, 0, tzinfo=timezone.utc)
    assert end == datetime(2024, 1, 16, 5, 59, 59, 999000, tzinfo=timezone.utc)


def test_utc_range_across_dst_change():
    start, end = date_string_to_utc_range("2024-03-10", "America/New_York")

    assert start == datetime(2024, 3, 10, 5, 0, tzinfo=timezone.utc)
    assert end - start == timedelta(hours=23) - timedelta(milliseconds=1)


def test_utc_instant_to_local_date_string():
    late_evening = datetime(2024, 1, 16, 4, 30, tzinfo=timezone.utc)

    assert utc_date_to_local_date_string(late_evening, "America/Monterrey") == "2024-01-15"
    assert utc_date_to_local_date_string(late_evening.replace(tzinfo=None), "America/Monterrey") == "2024-01-15"
