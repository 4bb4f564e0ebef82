from typing import Optional

from pydantic import BaseModel, ConfigDict


class ProgressRead(BaseModel):
    """Dashboard numbers for the signed-in user."""

    weight_progress: float
    miles_progress: float
    streak_progress: float
    current_streak: int
    current_weight: Optional[float] = None
    max_distance: float
    days_until_event: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class LeaderboardRow(BaseModel):
    rank: int
    user_id: int
    username: str
    profile_picture: Optional[str] = None
    percent: float
    weight_progress: float
    miles_progress: float
    streak_progress: float
    current_streak: int


class KudosRow(BaseModel):
    user_id: int
    username: str
    profile_picture: Optional[str] = None
    current_streak: int

    model_config = ConfigDict(from_attributes=True)


class LeaderboardRead(BaseModel):
    overall: list[LeaderboardRow]
    weight: list[LeaderboardRow]
    miles: list[LeaderboardRow]
    streak: list[LeaderboardRow]
    kudos: list[KudosRow]
