from datetime import date as date_, datetime, time, timedelta, timezone
from sqlalchemy import select, desc
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from chakravya.practice.models import SpiritualTask, UserProgress, _id32
from chakravya.shared.errors import NotFound

_UPSERT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def list_tasks(db: Session) -> list[SpiritualTask]:
    return list(db.scalars(select(SpiritualTask).order_by(SpiritualTask.created_at, SpiritualTask.title)).all())


def create_task(db: Session, **fields) -> SpiritualTask:
    t = SpiritualTask(**fields)
    db.add(t); db.commit(); db.refresh(t)
    return t


def list_progress(db: Session, user_id: str) -> list[UserProgress]:
    stmt = select(UserProgress).where(UserProgress.user_id == user_id).order_by(desc(UserProgress.date))
    return list(db.scalars(stmt).all())


def list_progress_on(db: Session, user_id: str, day: date_) -> list[UserProgress]:
    """Rows last updated on `day` (UTC)."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = start + timedelta(days=1)
    stmt = (
        select(UserProgress)
        .where(UserProgress.user_id == user_id, UserProgress.date >= start, UserProgress.date < end)
        .order_by(desc(UserProgress.date))
    )
    return list(db.scalars(stmt).all())


def upsert_progress(db: Session, user_id: str, task_id: str, target: int, completed: int) -> UserProgress:
    """
    Insert-or-update keyed on the (user_id, task_id) unique constraint, as a
    single statement so concurrent writers cannot produce duplicate rows.
    """
    if not db.get(SpiritualTask, task_id):
        raise NotFound("Spiritual task not found")

    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is None:
        raise NotImplementedError(f"upsert not supported on {db.get_bind().dialect.name}")

    now = datetime.now(timezone.utc)
    stmt = insert(UserProgress).values(
        id=_id32(), user_id=user_id, task_id=task_id,
        target=target, completed=completed, date=now, created_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "task_id"],
        set_={"target": stmt.excluded.target, "completed": stmt.excluded.completed, "date": stmt.excluded.date},
    )
    db.execute(stmt)
    db.commit()

    row = db.scalars(
        select(UserProgress)
        .where(UserProgress.user_id == user_id, UserProgress.task_id == task_id)
        .execution_options(populate_existing=True)
    ).first()
    return row
