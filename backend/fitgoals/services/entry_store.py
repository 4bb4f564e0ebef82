"""Data access for profiles and entries.

`EntryStore` is the read/write contract the progress engine and the
leaderboard depend on. `SqlEntryStore` implements it on SQLAlchemy and opens a
short-lived session per call, so one instance can be shared by worker threads.
"""

from datetime import datetime, timezone
import math
from typing import Callable, Optional, Protocol

from sqlalchemy import func
from sqlalchemy.orm import Session

from fitgoals.core.config import settings
from fitgoals.core.constants import MAX_MEASUREMENT
from fitgoals.core.time_utils import to_instant
from fitgoals.db import SessionLocal
from fitgoals.models.eating_well_entry import EatingWellEntry as EatingWellRow
from fitgoals.models.run_entry import RunEntry as RunRow
from fitgoals.models.user import User
from fitgoals.models.weight_entry import WeightEntry as WeightRow
from fitgoals.services.records import (
    EatingWellEntry,
    Goal,
    MetricKind,
    RunEntry,
    UserProfile,
    WeightEntry,
)


class EntryStore(Protocol):
    def get_profile(self, user_id: int) -> Optional[UserProfile]: ...

    def list_entries(
        self,
        user_id: int,
        kind: MetricKind,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> list: ...

    def get_latest_weight(self, user_id: int) -> Optional[WeightEntry]: ...

    def get_max_run_distance(self, user_id: int) -> float: ...

    def list_onboarded_profiles(self) -> list[UserProfile]: ...

    def append_entry(
        self, user_id: int, kind: MetricKind, value=None, when=None, source: str = "manual"
    ) -> tuple: ...


_ROWS = {
    MetricKind.weight: WeightRow,
    MetricKind.run: RunRow,
    MetricKind.eating_well: EatingWellRow,
}


def _float_or_none(value) -> Optional[float]:
    return float(value) if value is not None else None


def profile_from_row(user: User) -> UserProfile:
    return UserProfile(
        user_id=user.id,
        username=user.username,
        initial_weight=_float_or_none(user.initial_weight),
        goal=Goal(
            target_weight=_float_or_none(user.target_weight),
            target_miles=_float_or_none(user.target_miles),
            target_streak=user.target_streak,
        ),
        onboarded=bool(user.onboarded),
        email=user.email,
        profile_picture=user.profile_picture,
    )


def entry_from_row(kind: MetricKind, row):
    when = to_instant(row.date)
    if kind is MetricKind.weight:
        return WeightEntry(date=when, weight=float(row.weight))
    if kind is MetricKind.run:
        return RunEntry(date=when, distance=float(row.distance))
    return EatingWellEntry(date=when, ate_well=bool(row.ate_well))


def _measurement(value, name: str) -> float:
    """Validate a weight or distance and round it to the column's two decimals."""
    if value is None:
        raise ValueError(f"{name} is required")
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise ValueError(f"{name} must be a finite number > 0")
    number = round(number, 2)
    if number >= MAX_MEASUREMENT:
        raise ValueError(f"{name} must be < {MAX_MEASUREMENT}")
    return number

class SqlEntryStore:
    def __init__(self, session_factory: Callable[[], Session], tz_name: str | None = None):
        self._session_factory = session_factory
        self._tz_name = tz_name

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        with self._session_factory() as db:
            user = db.query(User).filter(User.id == user_id).first()
            return profile_from_row(user) if user else None

    def list_onboarded_profiles(self) -> list[UserProfile]:
        with self._session_factory() as db:
            users = (
                db.query(User)
                .filter(User.onboarded.is_(True))
                .order_by(User.id)
                .all()
            )
            return [profile_from_row(u) for u in users]

    def list_entries(
        self,
        user_id: int,
        kind: MetricKind,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> list:
        Row = _ROWS[MetricKind(kind)]
        with self._session_factory() as db:
            query = db.query(Row).filter(Row.user_id == user_id)
            order = Row.date.desc() if descending else Row.date.asc()
            query = query.order_by(order, Row.id.desc() if descending else Row.id.asc())
            if limit is not None:
                query = query.limit(limit)
            return [entry_from_row(MetricKind(kind), r) for r in query.all()]

    def get_latest_weight(self, user_id: int) -> Optional[WeightEntry]:
        rows = self.list_entries(user_id, MetricKind.weight, descending=True, limit=1)
        return rows[0] if rows else None

    def get_max_run_distance(self, user_id: int) -> float:
        with self._session_factory() as db:
            best = (
                db.query(func.max(RunRow.distance))
                .filter(RunRow.user_id == user_id)
                .scalar()
            )
            return float(best) if best is not None else 0.0

    def append_entry(self, user_id: int, kind: MetricKind, value=None, when=None, source: str = "manual"):
        """Append one entry; `when` defaults to now and is normalized to UTC."""
        kind = MetricKind(kind)
        instant = to_instant(when, self._tz_name) if when is not None else datetime.now(timezone.utc)

        if kind is MetricKind.weight:
            row = WeightRow(user_id=user_id, date=instant, weight=_measurement(value, "weight"))
        elif kind is MetricKind.run:
            distance = _measurement(value, "distance")
            row = RunRow(user_id=user_id, date=instant, distance=distance, source=source)
        else:
            row = EatingWellRow(user_id=user_id, date=instant, ate_well=True if value is None else bool(value))

        with self._session_factory() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            return row.id, entry_from_row(kind, row)


# Dependency we will use in FastAPI routes
def get_entry_store() -> SqlEntryStore:
    return SqlEntryStore(SessionLocal, tz_name=settings.timezone)
