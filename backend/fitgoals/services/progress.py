"""Progress engine.

Turns a user's goals plus their entry history into percentages in [0, 100]
and the current "ate well" streak. The computations are pure; the only I/O
happens in `compute_user_progress`, which reads through an `EntryStore`.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from fitgoals.core.constants import ANONYMOUS_USERNAME
from fitgoals.core.time_utils import local_day, previous_day, today_local
from fitgoals.services.records import EatingWellEntry, MetricKind, UserProfile


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def compute_weight_progress(
    initial_weight: Optional[float],
    target_weight: Optional[float],
    current_weight: Optional[float],
) -> float:
    """Percent of the way from the starting weight to the target weight.

    Works for both loss goals (target below start) and gain goals. Moving
    away from the target floors at 0; reaching or passing it caps at 100.
    """
    if not initial_weight or not target_weight or current_weight is None:
        return 0.0

    initial = float(initial_weight)
    target = float(target_weight)
    current = float(current_weight)

    if target == initial:
        # Nothing to move; done only if still on target
        return 100.0 if current == target else 0.0

    if target < initial:
        ratio = (initial - current) / (initial - target)
    else:
        ratio = (current - initial) / (target - initial)
    return _clamp01(ratio) * 100


def compute_miles_progress(target_miles: Optional[float], max_distance: Optional[float]) -> float:
    """Personal-best single run as a percentage of the target distance."""
    if not target_miles or target_miles <= 0 or not max_distance:
        return 0.0
    return _clamp01(float(max_distance) / float(target_miles)) * 100


def compute_current_streak(
    entries: Iterable[EatingWellEntry],
    today: date | datetime,
    tz_name: str | None = None,
) -> int:
    """Consecutive "ate well" days ending yesterday.

    Today is never counted, so logging today neither extends nor breaks the
    streak until the day is over. A day qualifies when any entry on it has
    `ate_well` set.
    """
    today = local_day(today, tz_name)

    qualifying: set[date] = set()
    for entry in entries:
        day = local_day(entry.date, tz_name)
        if day >= today:
            continue
        if entry.ate_well:
            qualifying.add(day)

    streak = 0
    expected = previous_day(today)
    while expected in qualifying:
        streak += 1
        expected = previous_day(expected)
    return streak


def compute_streak_progress(target_streak: Optional[int], current_streak: int) -> float:
    if not target_streak or target_streak <= 0:
        return 0.0
    return _clamp01(current_streak / target_streak) * 100


@dataclass(frozen=True)
class UserProgress:
    user_id: int
    username: str
    profile_picture: Optional[str] = None
    weight_progress: float = 0.0
    miles_progress: float = 0.0
    streak_progress: float = 0.0
    current_streak: int = 0
    current_weight: Optional[float] = None
    max_distance: float = 0.0

    @property
    def overall(self) -> float:
        return (self.weight_progress + self.miles_progress + self.streak_progress) / 3

    @classmethod
    def zero(cls, profile: UserProfile) -> "UserProgress":
        return cls(
            user_id=profile.user_id,
            username=profile.username or ANONYMOUS_USERNAME,
            profile_picture=profile.profile_picture,
        )


def compute_user_progress(
    store,
    user_id: int,
    today: date | datetime | None = None,
    tz_name: str | None = None,
) -> UserProgress:
    """Fetch one user's history through `store` and compute every metric."""
    profile = store.get_profile(user_id)
    if profile is None:
        return UserProgress(user_id=user_id, username=ANONYMOUS_USERNAME)

    if today is None:
        today = today_local(tz_name)

    latest = store.get_latest_weight(user_id)
    current_weight = latest.weight if latest is not None else None
    max_distance = store.get_max_run_distance(user_id)
    eating = store.list_entries(user_id, MetricKind.eating_well)

    goal = profile.goal
    streak = compute_current_streak(eating, today, tz_name)

    return UserProgress(
        user_id=profile.user_id,
        username=profile.username or ANONYMOUS_USERNAME,
        profile_picture=profile.profile_picture,
        weight_progress=compute_weight_progress(
            profile.initial_weight, goal.target_weight, current_weight
        ),
        miles_progress=compute_miles_progress(goal.target_miles, max_distance),
        streak_progress=compute_streak_progress(goal.target_streak, streak),
        current_streak=streak,
        current_weight=current_weight,
        max_distance=max_distance or 0.0,
    )
