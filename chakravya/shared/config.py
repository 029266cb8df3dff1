# chakravya/shared/config.py
from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

ROOT = Path(__file__).resolve().parents[2]   # project root
STORAGE_DIR = ROOT / "storage"


def _default_db_url() -> str:
    STORAGE_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(STORAGE_DIR / 'chakravya.db').as_posix()}"


def _db_url_from_env() -> str:
    url = os.getenv("DATABASE_URL", "").strip()
    if not url:
        return _default_db_url()
    # hosted postgres often hands out the legacy scheme
    return url.replace("postgres://", "postgresql://", 1)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class PaymentsEnabled:
    secret_key: str
    currency: str
    enabled: bool = True


@dataclass(frozen=True)
class PaymentsDisabled:
    reason: str
    enabled: bool = False


class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL: str = _db_url_from_env()

    # server-side sessions; the cookie only carries a signed session id
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "dev-session-secret")
    SESSION_ALG: str = os.getenv("SESSION_ALG", "HS256")
    SESSION_COOKIE: str = os.getenv("SESSION_COOKIE", "sid")
    SESSION_TTL_MIN: int = int(os.getenv("SESSION_TTL_MIN", str(7 * 24 * 60)))
    SESSION_COOKIE_SECURE: bool = _flag("SESSION_COOKIE_SECURE", "false")

    PAYMENTS_ENABLED: bool = _flag("PAYMENTS_ENABLED", "true")
    STRIPE_SECRET_KEY: str | None = os.getenv("STRIPE_SECRET_KEY") or None
    PAYMENT_CURRENCY: str = os.getenv("PAYMENT_CURRENCY", "inr")

    SEED_ON_STARTUP: bool = _flag("SEED_ON_STARTUP", "true")

    def payments(self) -> PaymentsEnabled | PaymentsDisabled:
        if not self.PAYMENTS_ENABLED:
            return PaymentsDisabled(reason="payments switched off (PAYMENTS_ENABLED=false)")
        if not self.STRIPE_SECRET_KEY:
            return PaymentsDisabled(reason="STRIPE_SECRET_KEY is not set")
        return PaymentsEnabled(secret_key=self.STRIPE_SECRET_KEY, currency=self.PAYMENT_CURRENCY.lower())


settings = Settings()
