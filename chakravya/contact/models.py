from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from chakravya.shared.db import Base
from typing import Literal
import uuid

SubmissionStatus = Literal["unread", "read", "replied"]


def _id32() -> str:
    return uuid.uuid4().hex


class ContactSubmission(Base):
    __tablename__ = "contact_submissions"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_id32)
    name: Mapped[str] = mapped_column(Text)
    email: Mapped[str] = mapped_column(String(255))
    message: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(16), default="unread")  # unread|read|replied
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
