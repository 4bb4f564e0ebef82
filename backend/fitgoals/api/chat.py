from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fitgoals.core.auth import get_onboarded_user
from fitgoals.core.config import settings
from fitgoals.core.constants import ANONYMOUS_USERNAME
from fitgoals.db import get_db
from fitgoals.models.chat_message import ChatMessage
from fitgoals.models.user import User
from fitgoals.schemas.chat import ChatMessageCreate, ChatMessageRead

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/messages", response_model=ChatMessageRead)
def send_message(
    payload: ChatMessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_onboarded_user),
):
    text = payload.message.strip()
    if not text:
        raise HTTPException(status_code=422, detail="Please enter a message")

    msg = ChatMessage(
        user_id=current_user.id,
        username=current_user.username or ANONYMOUS_USERNAME,
        profile_picture=current_user.profile_picture or None,
        message=text,
    )
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


@router.get("/messages", response_model=list[ChatMessageRead])
def list_messages(
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_onboarded_user),
):
    """
    Most recent `limit` messages, returned oldest first so the client can
    render them top to bottom.
    """
    limit = limit or settings.chat_history_limit
    rows = (
        db.query(ChatMessage)
        .order_by(ChatMessage.timestamp.desc(), ChatMessage.id.desc())
        .limit(limit)
        .all()
    )
    rows.reverse()
    return rows
