# chakravya/shared/auth.py
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request, Response
from jose import jwt, JWTError  # python-jose[cryptography]
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from chakravya.auth.models import User, UserSession
from chakravya.shared.config import Settings
from chakravya.shared.db import get_db
from chakravya.shared.errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _sign_sid(sid: str, expire: datetime, settings: Settings) -> str:
    payload = {"sid": sid, "exp": int(expire.timestamp())}
    return jwt.encode(payload, settings.SESSION_SECRET, algorithm=settings.SESSION_ALG)


def _read_sid(token: str, settings: Settings) -> Optional[str]:
    try:
        payload = jwt.decode(token, settings.SESSION_SECRET, algorithms=[settings.SESSION_ALG])
    except JWTError:
        return None
    return payload.get("sid")


def create_session(db: Session, response: Response, user: User, settings: Settings) -> UserSession:
    """Persist a server-side session for `user` and hand the browser a signed cookie for it."""
    purge_expired_sessions(db)
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.SESSION_TTL_MIN)
    s = UserSession(sid=secrets.token_urlsafe(32), expire=expire)
    s.sess = {"user_id": user.id}
    db.add(s); db.commit()
    response.set_cookie(
        key=settings.SESSION_COOKIE,
        value=_sign_sid(s.sid, expire, settings),
        max_age=settings.SESSION_TTL_MIN * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return s


def destroy_session(db: Session, request: Request, response: Response, settings: Settings) -> None:
    token = request.cookies.get(settings.SESSION_COOKIE)
    sid = _read_sid(token, settings) if token else None
    if sid:
        db.execute(delete(UserSession).where(UserSession.sid == sid))
        db.commit()
    response.delete_cookie(settings.SESSION_COOKIE)


def purge_expired_sessions(db: Session) -> int:
    res = db.execute(delete(UserSession).where(UserSession.expire <= datetime.now(timezone.utc)))
    db.commit()
    return res.rowcount or 0


def current_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    token = request.cookies.get(settings.SESSION_COOKIE)
    if not token:
        raise Unauthorized("Unauthorized")

    sid = _read_sid(token, settings)
    if not sid:
        raise Unauthorized("Invalid session")

    s = db.scalars(
        select(UserSession).where(UserSession.sid == sid, UserSession.expire > datetime.now(timezone.utc))
    ).first()
    if not s:
        raise Unauthorized("Session expired")

    user_id = s.sess.get("user_id")
    user = db.get(User, user_id) if user_id else None
    if not user:
        raise Unauthorized("Unauthorized")
    return user


def require_admin(user: User = Depends(current_user)) -> User:
    if user.role != "admin":
        raise Forbidden("Admin access required")
    return user
