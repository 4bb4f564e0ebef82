from datetime import date, timedelta
import random

from fitgoals.core.config import settings
from fitgoals.core.security import hash_password
from fitgoals.db import Base, SessionLocal, engine
from fitgoals.models.user import User
from fitgoals.services.entry_store import SqlEntryStore
from fitgoals.services.records import MetricKind


DEMO_USERS = [
    # username, initial weight, target weight, target miles, target streak
    ("angela", 160.0, 140.0, 6.2, 30),
    ("marco", 185.0, 175.0, 13.1, 14),
    ("priya", 120.0, 128.0, 3.1, 21),
]

DEMO_PASSWORD = "demo-password"


def clear_demo_users(db) -> None:
    """Delete demo accounts (entries cascade) so we can reseed cleanly."""
    emails = [f"{name}@example.com" for name, *_ in DEMO_USERS]
    db.query(User).filter(User.email.in_(emails)).delete(synchronize_session=False)
    db.commit()


def seed_demo_users(db, store: SqlEntryStore, days: int = 28) -> None:
    """Create onboarded demo users with a few weeks of weight, run and eating-well history."""
    today = date.today()
    added = 0

    for username, initial, target, miles, streak in DEMO_USERS:
        user = User(
            email=f"{username}@example.com",
            hashed_password=hash_password(DEMO_PASSWORD),
            username=username,
            initial_weight=initial,
            target_weight=target,
            target_miles=miles,
            target_streak=streak,
            onboarded=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        # Drift weight toward the goal with some noise
        step = (target - initial) / (days * 1.5)
        weight = initial
        for i in range(days, 0, -1):
            day = today - timedelta(days=i)
            weight += step + random.uniform(-0.4, 0.4)

            if i % 3 == 0:
                store.append_entry(user.id, MetricKind.weight, round(weight, 1), day)
                added += 1
            if day.weekday() in (1, 3, 6):
                store.append_entry(user.id, MetricKind.run, round(random.uniform(2.0, miles * 1.1), 1), day)
                added += 1
            # Most days eaten well; an occasional miss breaks the streak
            if random.random() < 0.85:
                store.append_entry(user.id, MetricKind.eating_well, True, day)
                added += 1

    print(f"Seeded {len(DEMO_USERS)} demo users with {added} entries")


def main():
    Base.metadata.create_all(bind=engine)
    store = SqlEntryStore(SessionLocal, tz_name=settings.timezone)
    db = SessionLocal()
    try:
        clear_demo_users(db)
        seed_demo_users(db, store)
    finally:
        db.close()


if __name__ == "__main__":
    main()
