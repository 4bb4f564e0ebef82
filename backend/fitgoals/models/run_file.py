from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from fitgoals.db import Base


class RunFile(Base):
    """Activity file (GPX/FIT) a run entry was imported from."""

    __tablename__ = "run_files"

    id = Column(Integer, primary_key=True, index=True)
    run_entry_id = Column(Integer, ForeignKey("run_entries.id", ondelete="CASCADE"), nullable=False, index=True)

    filename = Column(String, nullable=False)
    content_type = Column(String, nullable=False)
    size_bytes = Column(Integer, nullable=False)
    storage_path = Column(String, nullable=False)  # local path for now
    source = Column(String, nullable=False, default="gpx")

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
