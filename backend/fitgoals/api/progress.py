from fastapi import APIRouter, Depends

from fitgoals.core.auth import get_onboarded_user
from fitgoals.core.config import settings
from fitgoals.core.time_utils import days_until, today_local
from fitgoals.models.user import User
from fitgoals.schemas.progress import ProgressRead
from fitgoals.services.entry_store import SqlEntryStore, get_entry_store
from fitgoals.services.progress import compute_user_progress

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/me", response_model=ProgressRead)
def get_my_progress(
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    """
    Dashboard numbers for the signed-in user: weight, longest-run and
    eating-well streak progress toward their goals, plus the event countdown
    when one is configured.
    """
    today = today_local(settings.timezone)
    progress = compute_user_progress(store, current_user.id, today, settings.timezone)

    countdown = days_until(settings.event_date, today) if settings.event_date else None

    return ProgressRead(
        weight_progress=progress.weight_progress,
        miles_progress=progress.miles_progress,
        streak_progress=progress.streak_progress,
        current_streak=progress.current_streak,
        current_weight=progress.current_weight,
        max_distance=progress.max_distance,
        days_until_event=countdown,
    )
