from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, false
from sqlalchemy.sql import func
from fitgoals.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    # Filled in during onboarding
    username = Column(String(50), nullable=True)
    profile_picture = Column(String, nullable=True)  # URL or uploads path

    initial_weight = Column(Numeric(6, 2), nullable=True)

    # Goals: denominators for the progress percentages
    target_weight = Column(Numeric(6, 2), nullable=True)
    target_miles = Column(Numeric(6, 2), nullable=True)
    target_streak = Column(Integer, nullable=True)  # days

    onboarded = Column(Boolean, nullable=False, default=False, server_default=false())

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
