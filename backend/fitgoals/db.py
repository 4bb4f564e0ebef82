from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from fitgoals.core.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()

# SQLite connections get used from worker threads (leaderboard, threadpool routes)
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

# Create SQLAlchemy engine (connects to Postgres)
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,   # helps avoid stale connections
    connect_args=connect_args,
)

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency we will use in FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
