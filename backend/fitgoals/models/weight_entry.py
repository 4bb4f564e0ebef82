from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric
from fitgoals.db import Base


class WeightEntry(Base):
    __tablename__ = "weight_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    # Stored as UTC; the calendar day is derived with settings.timezone
    date = Column(DateTime(timezone=True), index=True, nullable=False)
    weight = Column(Numeric(6, 2), nullable=False)
