from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from chakravya.shared.db import Base
import uuid, json


def _id32() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_id32)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(16), default="user")  # user|admin
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, onupdate=_now)


class UserSession(Base):
    __tablename__ = "sessions"
    sid: Mapped[str] = mapped_column(String(64), primary_key=True)
    sess_json: Mapped[str] = mapped_column("sess", Text, default="{}")
    expire: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    @property
    def sess(self) -> dict:
        try:
            return json.loads(self.sess_json or "{}")
        except ValueError:
            return {}

    @sess.setter
    def sess(self, val: dict):
        self.sess_json = json.dumps(val or {})
