"""Leaderboard aggregation.

Progress is computed for every user concurrently (one worker-thread task per
user) and joined before ranking. A user whose data cannot be fetched shows
up with zero progress instead of failing the whole board.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from fitgoals.core.constants import KUDOS_SIZE
from fitgoals.services.progress import UserProgress
from fitgoals.services.records import UserProfile

logger = logging.getLogger(__name__)

METRICS = {
    "overall": lambda p: p.overall,
    "weight": lambda p: p.weight_progress,
    "miles": lambda p: p.miles_progress,
    "streak": lambda p: p.streak_progress,
}


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    percent: float
    progress: UserProgress


async def _progress_for(
    user: UserProfile,
    progress_fn: Callable[[UserProfile], UserProgress],
    gate: asyncio.Semaphore,
) -> UserProgress:
    async with gate:
        try:
            return await asyncio.to_thread(progress_fn, user)
        except Exception:
            logger.warning(
                "Progress lookup failed for user %s; ranking with zero progress",
                user.user_id,
                exc_info=True,
            )
            return UserProgress.zero(user)


async def collect_progress(
    users: Iterable[UserProfile],
    progress_fn: Callable[[UserProfile], UserProgress],
    concurrency: int | None = None,
) -> list[UserProgress]:
    """Run `progress_fn` for every user in parallel; results keep input order."""
    users = list(users)
    gate = asyncio.Semaphore(max(1, concurrency or len(users) or 1))
    return list(await asyncio.gather(*(_progress_for(u, progress_fn, gate) for u in users)))


def rank_by(results: Sequence[UserProgress], metric: str = "overall") -> list[RankedEntry]:
    """Order by `metric` descending; ties go to username, then user id."""
    if metric not in METRICS:
        raise ValueError(f"Unknown metric: {metric}")
    value_of = METRICS[metric]
    ordered = sorted(
        results,
        key=lambda p: (-value_of(p), (p.username or "").lower(), p.user_id),
    )
    return [
        RankedEntry(rank=i + 1, percent=value_of(p), progress=p)
        for i, p in enumerate(ordered)
    ]


async def rank_users(
    users: Iterable[UserProfile],
    progress_fn: Callable[[UserProfile], UserProgress],
    metric: str = "overall",
    concurrency: int | None = None,
) -> list[RankedEntry]:
    results = await collect_progress(users, progress_fn, concurrency)
    return rank_by(results, metric)


def top_streaks(results: Sequence[UserProgress], limit: int = KUDOS_SIZE) -> list[UserProgress]:
    """Users with an active streak, longest first (the "kudos" section)."""
    active = [p for p in results if p.current_streak > 0]
    active.sort(key=lambda p: (-p.current_streak, (p.username or "").lower(), p.user_id))
    return active[:limit]
