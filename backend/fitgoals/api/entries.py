import logging
import os
import tempfile
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from fitgoals.core.auth import get_onboarded_user
from fitgoals.core.config import settings
from fitgoals.core.constants import ACTIVITY_EXTENSIONS
from fitgoals.db import get_db
from fitgoals.models.run_file import RunFile
from fitgoals.models.user import User
from fitgoals.schemas.entry import (
    EatingWellEntryCreate,
    EatingWellEntryRead,
    RunEntryCreate,
    RunEntryRead,
    RunImportRead,
    WeightEntryCreate,
    WeightEntryRead,
)
from fitgoals.services.activity_import import read_activity
from fitgoals.services.entry_store import SqlEntryStore, get_entry_store
from fitgoals.services.records import MetricKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entries", tags=["entries"])


def _append(store: SqlEntryStore, user_id: int, kind: MetricKind, value, when, **kwargs):
    try:
        return store.append_entry(user_id, kind, value, when, **kwargs)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))



def _discard(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        logger.warning("Could not remove rejected import %s", path, exc_info=True)

@router.post("/weight", response_model=WeightEntryRead)
def add_weight(
    payload: WeightEntryCreate,
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    _, entry = _append(store, current_user.id, MetricKind.weight, payload.weight, payload.date)
    return entry


@router.get("/weight", response_model=list[WeightEntryRead])
def list_weight(
    limit: Optional[int] = Query(None, ge=1),
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    # Most recent first
    return store.list_entries(current_user.id, MetricKind.weight, limit=limit)


@router.post("/runs", response_model=RunEntryRead)
def add_run(
    payload: RunEntryCreate,
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    _, entry = _append(store, current_user.id, MetricKind.run, payload.distance, payload.date)
    return entry


@router.get("/runs", response_model=list[RunEntryRead])
def list_runs(
    limit: Optional[int] = Query(None, ge=1),
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    return store.list_entries(current_user.id, MetricKind.run, limit=limit)


@router.post("/eating-well", response_model=EatingWellEntryRead)
def add_eating_well(
    payload: EatingWellEntryCreate,
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    _, entry = _append(store, current_user.id, MetricKind.eating_well, True, payload.date)
    return entry


@router.get("/eating-well", response_model=list[EatingWellEntryRead])
def list_eating_well(
    limit: Optional[int] = Query(None, ge=1),
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    return store.list_entries(current_user.id, MetricKind.eating_well, limit=limit)


@router.post("/runs/import", response_model=RunImportRead)
def import_run(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_onboarded_user),
    store: SqlEntryStore = Depends(get_entry_store),
):
    filename = os.path.basename(file.filename or "import")
    ext = os.path.splitext(filename)[1].lower()
    if ext not in ACTIVITY_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Only .gpx or .fit files are supported")

    # Save to a uniquely named temp file so concurrent uploads never collide
    dir_path = os.path.join(settings.uploads_dir, "imports", str(current_user.id))
    os.makedirs(dir_path, exist_ok=True)
    data = file.file.read()
    with tempfile.NamedTemporaryFile(dir=dir_path, suffix=ext, delete=False) as out:
        out.write(data)
        save_path = out.name

    source = ext.lstrip(".")
    try:
        try:
            summary = read_activity(save_path)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        entry_id, entry = _append(
            store,
            current_user.id,
            MetricKind.run,
            summary.distance_mi,
            summary.started_at,
            source=source,
        )
    except HTTPException:
        _discard(save_path)
        raise

    # Move file under the entry-specific folder and record it
    run_dir = os.path.join(settings.uploads_dir, "runs", str(entry_id))
    os.makedirs(run_dir, exist_ok=True)
    final_path = os.path.join(run_dir, filename)
    try:
        os.replace(save_path, final_path)
    except OSError:
        logger.warning("Could not move %s into %s", save_path, run_dir, exc_info=True)
        final_path = save_path

    rf = RunFile(
        run_entry_id=entry_id,
        filename=filename,
        content_type=file.content_type or "application/octet-stream",
        size_bytes=len(data),
        storage_path=final_path,
        source=source,
    )
    db.add(rf)
    db.commit()
    db.refresh(rf)

    logger.info("Imported %.2f mi run for user %s from %s", entry.distance, current_user.id, filename)
    return RunImportRead(
        id=entry_id,
        date=entry.date,
        distance=entry.distance,
        source=source,
        duration_seconds=summary.duration_seconds,
        file_id=rf.id,
    )
