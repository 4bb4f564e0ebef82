from datetime import date, datetime, timedelta, timezone

import pytest

from fitgoals.services.progress import (
    UserProgress,
    compute_miles_progress,
    compute_streak_progress,
    compute_user_progress,
    compute_weight_progress,
)
from fitgoals.services.records import (
    EatingWellEntry,
    Goal,
    MetricKind,
    RunEntry,
    UserProfile,
    WeightEntry,
)


class FakeStore:
    """In-memory EntryStore for one or more users."""

    def __init__(self, profiles, entries=None):
        self.profiles = {p.user_id: p for p in profiles}
        self.entries = entries or {}

    def get_profile(self, user_id):
        return self.profiles.get(user_id)

    def list_entries(self, user_id, kind, descending=True, limit=None):
        rows = sorted(self.entries.get((user_id, kind), []), key=lambda e: e.date, reverse=descending)
        return rows[:limit] if limit else rows

    def get_latest_weight(self, user_id):
        rows = self.list_entries(user_id, MetricKind.weight, limit=1)
        return rows[0] if rows else None

    def get_max_run_distance(self, user_id):
        runs = self.entries.get((user_id, MetricKind.run), [])
        return max((r.distance for r in runs), default=0.0)

    def list_onboarded_profiles(self):
        return [p for p in self.profiles.values() if p.onboarded]


def at(d: date) -> datetime:
    return datetime(d.year, d.month, d.day, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("initial,target", [(200, 180), (150, 170)])
def test_weight_no_change_is_zero(initial, target):
    assert compute_weight_progress(initial, target, initial) == 0.0


@pytest.mark.parametrize(
    "initial,target,current",
    [(200, 180, 180), (200, 180, 170), (150, 170, 170), (150, 170, 175)],
)
def test_weight_at_or_past_target_is_full(initial, target, current):
    assert compute_weight_progress(initial, target, current) == 100.0


def test_weight_loss_halfway():
    assert compute_weight_progress(200, 180, 190) == pytest.approx(50.0)


def test_weight_gain_quarter():
    assert compute_weight_progress(150, 170, 155) == pytest.approx(25.0)


def test_weight_regression_floors_at_zero():
    assert compute_weight_progress(200, 180, 210) == 0.0
    assert compute_weight_progress(150, 170, 140) == 0.0


def test_weight_monotonic_toward_target():
    values = [compute_weight_progress(200, 180, w) for w in range(205, 175, -1)]
    assert values == sorted(values)


def test_weight_missing_inputs():
    assert compute_weight_progress(None, 180, 190) == 0.0
    assert compute_weight_progress(200, None, 190) == 0.0
    assert compute_weight_progress(200, 180, None) == 0.0


def test_weight_target_equals_initial():
    assert compute_weight_progress(180, 180, 180) == 100.0
    assert compute_weight_progress(180, 180, 181) == 0.0


def test_miles_progress():
    assert compute_miles_progress(4, 2) == pytest.approx(50.0)
    assert compute_miles_progress(4, 10) == 100.0
    assert compute_miles_progress(0, 3) == 0.0
    assert compute_miles_progress(None, 3) == 0.0
    assert compute_miles_progress(4, 0) == 0.0


def test_streak_progress():
    assert compute_streak_progress(14, 7) == pytest.approx(50.0)
    assert compute_streak_progress(14, 30) == 100.0
    assert compute_streak_progress(0, 3) == 0.0
    assert compute_streak_progress(None, 3) == 0.0


def test_user_progress_combines_metrics():
    today = date(2025, 3, 10)
    profile = UserProfile(
        user_id=1,
        username="angela",
        initial_weight=160,
        goal=Goal(target_weight=140, target_miles=4, target_streak=4),
        onboarded=True,
    )
    entries = {
        (1, MetricKind.weight): [
            WeightEntry(date=at(today - timedelta(days=5)), weight=158),
            WeightEntry(date=at(today - timedelta(days=1)), weight=150),
        ],
        (1, MetricKind.run): [
            RunEntry(date=at(today - timedelta(days=3)), distance=3),
            RunEntry(date=at(today - timedelta(days=1)), distance=2),
        ],
        (1, MetricKind.eating_well): [
            EatingWellEntry(date=at(today - timedelta(days=1))),
            EatingWellEntry(date=at(today - timedelta(days=2))),
        ],
    }
    progress = compute_user_progress(FakeStore([profile], entries), 1, today, "UTC")

    assert progress.current_weight == 150
    assert progress.weight_progress == pytest.approx(50.0)
    assert progress.max_distance == 3
    assert progress.miles_progress == pytest.approx(75.0)
    assert progress.current_streak == 2
    assert progress.streak_progress == pytest.approx(50.0)


def test_user_progress_without_profile_or_entries():
    store = FakeStore([UserProfile(user_id=2, goal=Goal(target_weight=150, target_miles=3, target_streak=7))])

    missing = compute_user_progress(store, 99, date(2025, 3, 10), "UTC")
    assert missing == UserProgress(user_id=99, username="Anonymous")

    empty = compute_user_progress(store, 2, date(2025, 3, 10), "UTC")
    assert empty.weight_progress == 0.0
    assert empty.miles_progress == 0.0
    assert empty.streak_progress == 0.0
    assert empty.current_weight is None
