from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Integer, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from chakravya.shared.db import Base
import uuid


def _id32() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SpiritualTask(Base):
    __tablename__ = "spiritual_tasks"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_id32)
    title: Mapped[str] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(32))  # chanting|reading|service|meditation
    default_target: Mapped[int] = mapped_column(Integer, default=1)
    unit: Mapped[str] = mapped_column(String(32), default="times")  # rounds|chapters|minutes|times
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)


class UserProgress(Base):
    __tablename__ = "user_progress"
    # one current row per (user, task); `date` records the last update, not a daily history
    __table_args__ = (UniqueConstraint("user_id", "task_id", name="uq_user_progress_user_task"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_id32)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    task_id: Mapped[str] = mapped_column(String(32), ForeignKey("spiritual_tasks.id", ondelete="CASCADE"))
    target: Mapped[int] = mapped_column(Integer)
    completed: Mapped[int] = mapped_column(Integer, default=0)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    task: Mapped[SpiritualTask] = relationship(lazy="joined")
