import logging
import os

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from fitgoals.core.auth import get_current_user
from fitgoals.core.constants import PICTURE_EXTENSIONS, PICTURE_MAX_BYTES
from fitgoals.core.session_events import SessionEvents, get_session_events, state_for
from fitgoals.db import get_db
from fitgoals.models.user import User
from fitgoals.schemas.user import OnboardingRequest, PictureUploadResult, ProfileUpdate, UserRead
from fitgoals.services.picture_store import PictureStore, get_picture_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


def _clean_username(raw: str | None) -> str:
    name = (raw or "").strip()
    if not name:
        raise HTTPException(status_code=422, detail="Username cannot be empty")
    return name


@router.get("/me", response_model=UserRead)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/me", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    update_data = payload.model_dump(exclude_unset=True)

    if "username" in update_data:
        update_data["username"] = _clean_username(update_data["username"])

    # Goals can be edited but never cleared
    for key, value in update_data.items():
        if value is None:
            continue
        setattr(current_user, key, value)

    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/onboarding", response_model=UserRead)
def complete_onboarding(
    payload: OnboardingRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    events: SessionEvents = Depends(get_session_events),
):
    current_user.username = _clean_username(payload.username)
    current_user.initial_weight = payload.initial_weight
    current_user.target_weight = payload.target_weight
    current_user.target_miles = payload.target_miles
    current_user.target_streak = payload.target_streak
    current_user.onboarded = True

    db.commit()
    db.refresh(current_user)

    logger.info("User %s completed onboarding", current_user.id)
    events.publish(current_user.id, state_for(current_user))
    return current_user


@router.post("/picture", response_model=PictureUploadResult)
def upload_picture(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    store: PictureStore = Depends(get_picture_store),
):
    filename = file.filename or "avatar.png"
    ext = os.path.splitext(filename)[1].lower()
    if ext not in PICTURE_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Only image files are supported")

    data = file.file.read()
    if len(data) > PICTURE_MAX_BYTES:
        raise HTTPException(status_code=400, detail="Picture is too large")

    url = store.save(current_user.id, filename, data, file.content_type or "application/octet-stream")
    if url is None:
        # Keep whatever picture the user already had
        return PictureUploadResult(
            profile_picture=current_user.profile_picture,
            uploaded=False,
            warning="Could not upload profile picture. Please try again later.",
        )

    current_user.profile_picture = url
    db.commit()
    return PictureUploadResult(profile_picture=url, uploaded=True)
