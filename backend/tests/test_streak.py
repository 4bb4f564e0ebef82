from datetime import date, datetime, timedelta, timezone

from fitgoals.services.progress import compute_current_streak
from fitgoals.services.records import EatingWellEntry

TODAY = date(2025, 6, 15)


def ate_well(days_ago: int, ate: bool = True, hour: int = 19) -> EatingWellEntry:
    d = TODAY - timedelta(days=days_ago)
    return EatingWellEntry(date=datetime(d.year, d.month, d.day, hour, tzinfo=timezone.utc), ate_well=ate)


def streak(entries, today=TODAY):
    return compute_current_streak(entries, today, "UTC")


def test_no_entries():
    assert streak([]) == 0


def test_yesterday_and_day_before():
    assert streak([ate_well(1), ate_well(2)]) == 2


def test_gap_two_days_ago_stops_streak():
    assert streak([ate_well(1), ate_well(3), ate_well(4)]) == 1


def test_missing_yesterday_means_no_streak():
    assert streak([ate_well(2), ate_well(3)]) == 0


def test_today_is_ignored_not_a_break():
    assert streak([ate_well(0), ate_well(1), ate_well(2)]) == 2
    assert streak([ate_well(0)]) == 0


def test_unsorted_input():
    assert streak([ate_well(3), ate_well(1), ate_well(2)]) == 3


def test_duplicate_day_matches_if_any_ate_well():
    entries = [ate_well(1, ate=False, hour=8), ate_well(1, hour=20), ate_well(2), ate_well(2)]
    assert streak(entries) == 2


def test_ate_well_false_breaks():
    assert streak([ate_well(1), ate_well(2, ate=False), ate_well(3)]) == 1


def test_today_as_datetime_is_normalized_to_midnight():
    now = datetime(2025, 6, 15, 23, 59, tzinfo=timezone.utc)
    assert compute_current_streak([ate_well(1), ate_well(2)], now, "UTC") == 2


def test_day_boundary_follows_timezone():
    # 2025-06-14 03:00 UTC is still June 13 in New York
    late_evening = EatingWellEntry(date=datetime(2025, 6, 14, 3, 0, tzinfo=timezone.utc))
    assert compute_current_streak([late_evening], TODAY, "UTC") == 1
    assert compute_current_streak([late_evening], TODAY, "America/New_York") == 0
