import logging
import bcrypt
from sqlalchemy import select
from sqlalchemy.orm import Session
from chakravya.auth.models import User
from chakravya.auth.schemas import ProfileUpdate
from chakravya.shared.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)


def hash_password(pw: str) -> str:
    return bcrypt.hashpw(pw.encode(), bcrypt.gensalt()).decode()


def verify_password(pw: str, ph: str | None) -> bool:
    if not ph:
        return False
    try:
        return bcrypt.checkpw(pw.encode(), ph.encode())
    except ValueError:
        # malformed stored hash
        return False


def _norm(email: str) -> str:
    return email.lower().strip()


def get_user(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == _norm(email))).first()


def create_user(
    db: Session,
    email: str,
    password: str | None,
    role: str = "user",
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    if get_user_by_email(db, email):
        raise ValidationError("Email already registered")
    u = User(
        email=_norm(email),
        password_hash=hash_password(password) if password else None,
        role=role,
        first_name=first_name,
        last_name=last_name,
    )
    db.add(u); db.commit(); db.refresh(u)
    return u


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    u = get_user_by_email(db, email)
    if not u or not verify_password(password, u.password_hash):
        logger.info("login rejected for %s", _norm(email))
        return None
    return u


def update_profile(db: Session, user_id: str, payload: ProfileUpdate) -> User:
    u = db.get(User, user_id)
    if not u:
        raise NotFound("User not found")
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(u, field, value.strip() if isinstance(value, str) else value)
    db.commit(); db.refresh(u)
    return u
