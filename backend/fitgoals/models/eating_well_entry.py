from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, true
from fitgoals.db import Base


class EatingWellEntry(Base):
    __tablename__ = "eating_well_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    date = Column(DateTime(timezone=True), index=True, nullable=False)
    ate_well = Column(Boolean, nullable=False, default=True, server_default=true())
