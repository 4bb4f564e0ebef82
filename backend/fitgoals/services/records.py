"""Plain records handed from the entry store to the progress engine.

Rows are converted into these once, at the storage boundary, so progress
code never sees ORM objects or storage-specific timestamp types.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class MetricKind(str, Enum):
    weight = "weight"
    run = "run"
    eating_well = "eating_well"


@dataclass(frozen=True)
class Goal:
    target_weight: Optional[float] = None
    target_miles: Optional[float] = None
    target_streak: Optional[int] = None


@dataclass(frozen=True)
class UserProfile:
    user_id: int
    username: Optional[str] = None
    initial_weight: Optional[float] = None
    goal: Goal = field(default_factory=Goal)
    onboarded: bool = False
    email: Optional[str] = None
    profile_picture: Optional[str] = None


@dataclass(frozen=True)
class WeightEntry:
    date: datetime
    weight: float


@dataclass(frozen=True)
class RunEntry:
    date: datetime
    distance: float


@dataclass(frozen=True)
class EatingWellEntry:
    date: datetime
    ate_well: bool = True
