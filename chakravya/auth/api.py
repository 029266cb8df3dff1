# chakravya/auth/api.py
import logging
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from chakravya.shared.db import get_db
from chakravya.shared.auth import create_session, current_user, destroy_session, get_settings
from chakravya.shared.config import Settings
from chakravya.shared.errors import Unauthorized
from chakravya.auth.models import User
from chakravya.auth.schemas import LoginIn, LogoutOut, ProfileUpdate, RegisterIn, UserOut
from chakravya.auth.service import authenticate_user, create_user, update_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=UserOut)
def api_register(
    inb: RegisterIn,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user = create_user(db, inb.email, inb.password, first_name=inb.first_name, last_name=inb.last_name)
    create_session(db, response, user, settings)
    logger.info("registered user %s", user.id)
    return user


@router.post("/login", response_model=UserOut)
def api_login(
    inb: LoginIn,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user = authenticate_user(db, inb.email, inb.password)
    if not user:
        raise Unauthorized("Invalid email or password")
    create_session(db, response, user, settings)
    logger.info("user %s logged in", user.id)
    return user


@router.post("/logout", response_model=LogoutOut)
def api_logout(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    destroy_session(db, request, response, settings)
    return LogoutOut()


@router.get("/user", response_model=UserOut)
def api_me(user: User = Depends(current_user)):
    return user


@router.patch("/user", response_model=UserOut)
def api_update_me(inb: ProfileUpdate, user: User = Depends(current_user), db: Session = Depends(get_db)):
    return update_profile(db, user.id, inb)
