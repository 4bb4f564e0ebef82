import asyncio

from fastapi import APIRouter, Depends

from fitgoals.core.auth import get_onboarded_user
from fitgoals.core.config import settings
from fitgoals.core.time_utils import today_local
from fitgoals.models.user import User
from fitgoals.schemas.progress import KudosRow, LeaderboardRead, LeaderboardRow
from fitgoals.services.entry_store import SqlEntryStore, get_entry_store
from fitgoals.services.leaderboard import RankedEntry, collect_progress, rank_by, top_streaks
from fitgoals.services.progress import compute_user_progress

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


def _rows(ranked: list[RankedEntry]) -> list[LeaderboardRow]:
    return [
        LeaderboardRow(
            rank=r.rank,
            user_id=r.progress.user_id,
            username=r.progress.username,
            profile_picture=r.progress.profile_picture,
            percent=r.percent,
            weight_progress=r.progress.weight_progress,
            miles_progress=r.progress.miles_progress,
            streak_progress=r.progress.streak_progress,
            current_streak=r.progress.current_streak,
        )
        for r in ranked
    ]


@router.get("", response_model=LeaderboardRead)
async def get_leaderboard(
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    """Rank every onboarded user; progress is computed once per user."""
    today = today_local(settings.timezone)
    progress_fn = lambda profile: compute_user_progress(  # noqa: E731
        store, profile.user_id, today, settings.timezone
    )

    users = await asyncio.to_thread(store.list_onboarded_profiles)
    results = await collect_progress(users, progress_fn, settings.leaderboard_concurrency)

    return LeaderboardRead(
        overall=_rows(rank_by(results, "overall")),
        weight=_rows(rank_by(results, "weight")),
        miles=_rows(rank_by(results, "miles")),
        streak=_rows(rank_by(results, "streak")),
        kudos=[KudosRow.model_validate(p) for p in top_streaks(results)],
    )
