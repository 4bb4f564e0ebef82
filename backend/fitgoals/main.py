import logging
import math
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fitgoals.api.auth import router as auth_router
from fitgoals.api.profile import router as profile_router
from fitgoals.api.entries import router as entries_router
from fitgoals.api.progress import router as progress_router
from fitgoals.api.leaderboard import router as leaderboard_router
from fitgoals.api.chat import router as chat_router
from fitgoals.db import Base, engine
from fitgoals.models.user import User  # noqa: F401  (import ensures table is registered)
from fitgoals.models.weight_entry import WeightEntry  # noqa: F401
from fitgoals.models.run_entry import RunEntry  # noqa: F401
from fitgoals.models.eating_well_entry import EatingWellEntry  # noqa: F401
from fitgoals.models.run_file import RunFile  # noqa: F401
from fitgoals.models.chat_message import ChatMessage  # noqa: F401
from fitgoals.core.config import settings
from fitgoals.core.session_events import SessionEvents, SessionState

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="fitgoals")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables on startup
Base.metadata.create_all(bind=engine)

# Ensure uploads directory exists; local profile pictures are served from it
os.makedirs(settings.uploads_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")


def _log_session_transition(user_id: int, state: SessionState) -> None:
    logger.info("Session for user %s is now %s", user_id, state.value)



def _json_safe(value):
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Rejected NaN/Infinity inputs are echoed in the errors and plain JSON cannot carry them
    return JSONResponse(status_code=422, content={"detail": _json_safe(jsonable_encoder(exc.errors()))})


app.state.session_events = SessionEvents()
app.state.session_events.subscribe(_log_session_transition)

app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(entries_router)
app.include_router(progress_router)
app.include_router(leaderboard_router)
app.include_router(chat_router)


@app.get("/")
def root():
    return {"message": "fitgoals backend is running"}
