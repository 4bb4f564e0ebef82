from datetime import date, datetime, timezone

import pytest

from fitgoals.core.time_utils import days_until, local_day, to_instant


class StorageTimestamp:
    """Stand-in for a storage SDK timestamp wrapper."""

    def __init__(self, dt):
        self._dt = dt

    def to_datetime(self):
        return self._dt


def test_to_instant_variants_agree():
    expected = datetime(2025, 1, 2, 7, 30, tzinfo=timezone.utc)
    assert to_instant(expected) == expected
    assert to_instant(datetime(2025, 1, 2, 7, 30)) == expected
    assert to_instant("2025-01-02T07:30:00Z") == expected
    assert to_instant("2025-01-02T02:30:00-05:00") == expected
    assert to_instant(expected.timestamp()) == expected
    assert to_instant(StorageTimestamp(expected)) == expected


def test_calendar_day_is_midnight_in_zone():
    assert to_instant(date(2025, 1, 2), "UTC") == datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert to_instant("2025-01-02", "America/New_York") == datetime(2025, 1, 2, 5, tzinfo=timezone.utc)
    assert local_day(to_instant(date(2025, 1, 2), "Asia/Tokyo"), "Asia/Tokyo") == date(2025, 1, 2)


@pytest.mark.parametrize("bad", [None, "", "yesterday", True, object()])
def test_to_instant_rejects_garbage(bad):
    with pytest.raises(ValueError):
        to_instant(bad)


def test_days_until():
    assert days_until(date(2026, 5, 24), date(2026, 5, 1)) == 23
    assert days_until(date(2026, 5, 24), date(2026, 6, 1)) == 0
