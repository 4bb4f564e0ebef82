import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from fitgoals.core.auth import get_current_user
from fitgoals.core.security import create_access_token, hash_password, verify_password
from fitgoals.core.session_events import SessionEvents, SessionState, get_session_events, state_for
from fitgoals.db import get_db
from fitgoals.models.user import User
from fitgoals.schemas.user import Credentials, Token, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_for(user: User) -> Token:
    return Token(
        access_token=create_access_token({"sub": str(user.id)}),
        session_state=state_for(user).value,
        user=UserRead.model_validate(user),
    )


@router.post("/signup", response_model=Token)
def signup(
    payload: Credentials,
    db: Session = Depends(get_db),
    events: SessionEvents = Depends(get_session_events),
):
    email = payload.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    # New accounts must go through onboarding before the app unlocks
    user = User(email=email, hashed_password=hash_password(payload.password), onboarded=False)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User %s signed up", user.id)
    events.publish(user.id, state_for(user))
    return _token_for(user)


@router.post("/login", response_model=Token)
def login(
    payload: Credentials,
    db: Session = Depends(get_db),
    events: SessionEvents = Depends(get_session_events),
):
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    events.publish(user.id, state_for(user))
    return _token_for(user)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/logout")
def logout(
    current_user: User = Depends(get_current_user),
    events: SessionEvents = Depends(get_session_events),
):
    # Tokens are stateless; the client drops its copy
    events.publish(current_user.id, SessionState.signed_out)
    return {"message": "Logged out", "session_state": SessionState.signed_out.value}
