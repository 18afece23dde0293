from datetime import datetime

import pytest

from nongkrongr.services.hours import is_open_late, is_open_now, opening_status, parse_time


def at(hour, minute=0):
    return datetime(2025, 3, 5, hour, minute)


@pytest.mark.parametrize(
    "value, expected",
    [("08:00", 480), ("23:59", 1439), ("7:5", 425), ("24:00", None), ("noon", None), ("", None)],
)
def test_parse_time(value, expected):
    assert parse_time(value) == expected


def test_missing_hours_are_unknown():
    status = opening_status("", at(12))
    assert status.status == "unknown"
    assert not status.is_open
    assert status.message == "Jam tidak tersedia"


def test_round_the_clock():
    status = opening_status("Buka 24 Jam", at(3))
    assert status.is_open
    assert status.message == "Buka 24 Jam"


def test_unparseable_range():
    assert opening_status("Senin - Jumat", at(12)).status == "unknown"


def test_regular_day():
    assert opening_status("08:00 - 22:00", at(12)).status == "open"
    assert opening_status("08:00 - 22:00", at(23)).status == "closed"
    assert opening_status("08:00 - 22:00", at(5)).status == "closed"


def test_opening_soon_window():
    status = opening_status("08:00 - 22:00", at(7, 30))
    assert status.status == "opening_soon"
    assert not status.is_open
    assert "30 mnt" in status.message


def test_closing_soon_window():
    status = opening_status("08:00 - 22:00", at(21, 15))
    assert status.status == "closing_soon"
    assert status.is_open
    assert "45 mnt" in status.message


def test_closing_time_is_exclusive():
    assert not is_open_now("08:00 - 22:00", at(22))


def test_overnight_range():
    assert is_open_now("18:00 - 02:00", at(23))
    assert is_open_now("18:00 - 02:00", at(1))
    assert not is_open_now("18:00 - 02:00", at(3))
    assert opening_status("18:00 - 02:00", at(1, 30)).status == "closing_soon"


@pytest.mark.parametrize(
    "hours, expected",
    [
        ("08:00 - 23:00", True),
        ("08:00 - 22:59", False),
        ("18:00 - 02:00", True),
        ("24 Jam", True),
        ("", False),
        ("tutup", False),
    ],
)
def test_open_late(hours, expected):
    assert is_open_late(hours) is expected
