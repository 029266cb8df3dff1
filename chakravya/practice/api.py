from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from chakravya.shared.db import get_db
from chakravya.shared.auth import current_user
from chakravya.auth.models import User
from chakravya.practice.schemas import ProgressOut, ProgressUpsert, ProgressWithTaskOut, SpiritualTaskOut
from chakravya.practice.service import list_progress, list_progress_on, list_tasks, upsert_progress

router = APIRouter(prefix="/api", tags=["Practice"])


@router.get("/spiritual-tasks", response_model=List[SpiritualTaskOut])
def api_tasks(db: Session = Depends(get_db)):
    return list_tasks(db)


@router.get("/user-progress", response_model=List[ProgressWithTaskOut])
def api_progress(
    on: date | None = Query(None, alias="date", description="YYYY-MM-DD; only rows updated that day"),
    user: User = Depends(current_user),
    db: Session = Depends(get_db),
):
    if on is not None:
        return list_progress_on(db, user.id, on)
    return list_progress(db, user.id)


@router.post("/user-progress", response_model=ProgressOut)
def api_upsert_progress(inb: ProgressUpsert, user: User = Depends(current_user), db: Session = Depends(get_db)):
    return upsert_progress(db, user.id, inb.task_id, inb.target, inb.completed)
