from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from fitgoals.db import Base


class RunEntry(Base):
    __tablename__ = "run_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    date = Column(DateTime(timezone=True), index=True, nullable=False)
    distance = Column(Numeric(6, 2), nullable=False)  # miles, e.g. 7.35

    # Source of run data
    source = Column(
        String(20),
        nullable=False,
        server_default="manual",  # manual entry, gpx, fit
    )
