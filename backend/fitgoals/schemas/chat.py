from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessageCreate(BaseModel):
    message: str = Field(..., max_length=2000)


class ChatMessageRead(BaseModel):
    id: int
    user_id: int
    username: str
    profile_picture: Optional[str] = None
    message: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
