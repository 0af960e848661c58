import datetime

import pytest
from freezegun import freeze_time

from tidetime import util


def test_now() -> None:
    """Test that utc_now() returns naive datetime without timezone information."""
    now = util.utc_now()
    assert isinstance(now, datetime.datetime)
    assert now.tzinfo is None  # Should be naive (no timezone info)

    utc_now = datetime.datetime.now(tz=datetime.timezone.utc).replace(tzinfo=None)
    time_diff = abs((utc_now - now).total_seconds())
    assert time_diff < 1  # Should be less than 1 second difference


@freeze_time("2024-06-01 12:34:56")
def test_now_frozen() -> None:
    assert util.utc_now() == datetime.datetime(2024, 6, 1, 12, 34, 56)


def test_to_naive_utc() -> None:
    naive = datetime.datetime(2024, 6, 1, 12, 0)
    assert util.to_naive_utc(naive) is naive

    aware = datetime.datetime(
        2024, 6, 1, 14, 0, tzinfo=datetime.timezone(datetime.timedelta(hours=2))
    )
    assert util.to_naive_utc(aware) == datetime.datetime(2024, 6, 1, 12, 0)


def test_parse_local_time() -> None:
    assert util.parse_local_time("2024-06-01T09:05") == datetime.datetime(
        2024, 6, 1, 9, 5
    )


@pytest.mark.parametrize(
    "value",
    [
        "2024-06-01 09:05",  # Space separator
        "2024-06-01T09:05:00",  # Seconds
        "2024-06-01T09:05Z",  # Zone suffix
        "2024-06-01T09:05+02:00",  # Offset suffix
        "2024-6-1T9:05",  # Unpadded
        "2024-02-30T09:00",  # Not a real date
        "2024-06-01T24:00",  # Not a real time
        "",
    ],
)
def test_parse_local_time_rejects(value: str) -> None:
    with pytest.raises(ValueError):
        util.parse_local_time(value)


def test_format_local_time_drops_seconds() -> None:
    t = datetime.datetime(2024, 6, 1, 9, 5, 59, 999999)
    assert util.format_local_time(t) == "2024-06-01T09:05"


@pytest.mark.parametrize(
    "offset_seconds",
    [
        util.MIN_UTC_OFFSET_SECONDS,  # UTC-12
        -9 * 3600 - 30 * 60,  # UTC-09:30
        -5 * 3600,
        0,
        3600,
        5 * 3600 + 45 * 60,  # UTC+05:45
        util.MAX_UTC_OFFSET_SECONDS,  # UTC+14
    ],
)
@pytest.mark.parametrize(
    "local", ["2024-06-01T00:00", "2024-12-31T23:59", "2024-02-29T12:30"]
)
def test_local_utc_round_trip(local: str, offset_seconds: int) -> None:
    instant = util.local_to_utc(util.parse_local_time(local), offset_seconds)
    back = util.format_local_time(util.utc_to_local(instant, offset_seconds))
    assert back == local


def test_local_to_utc_direction() -> None:
    # 10:00 in UTC+2 is 08:00 UTC
    local = datetime.datetime(2024, 6, 1, 10, 0)
    assert util.local_to_utc(local, 7200) == datetime.datetime(2024, 6, 1, 8, 0)


@pytest.mark.parametrize(
    "instant,offset,expected",
    [
        (datetime.datetime(2024, 6, 1, 12, 0), 0, "2024-06-01"),
        # Already tomorrow east of Greenwich
        (datetime.datetime(2024, 6, 1, 23, 30), 3600, "2024-06-02"),
        # Still yesterday west of Greenwich
        (datetime.datetime(2024, 6, 1, 0, 30), -3600, "2024-05-31"),
    ],
)
def test_local_date_key(instant: datetime.datetime, offset: int, expected: str) -> None:
    assert util.local_date_key(instant, offset) == expected
