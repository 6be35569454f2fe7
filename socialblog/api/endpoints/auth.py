import logging
from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from socialblog.core.errors import AlreadyExists, InvalidCredentials
from socialblog.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
)
from socialblog.db.database import get_session
from socialblog.models.user import User
from socialblog.schemas.user import AuthResponse, UserCredentials

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(user: User) -> dict:
    return {
        "user": {"id": user.id, "username": user.username},
        "token": create_access_token(user),
    }


@router.post("/signup", response_model=AuthResponse, summary="Register a new user")
def signup(
    user_in: UserCredentials,
    session: Annotated[Session, Depends(get_session)]
) -> dict:
    """Create a user and sign them in"""
    result = session.execute(
        select(User).where(User.username == user_in.username)
    )
    if result.scalar_one_or_none():
        raise AlreadyExists()

    user = User(
        username=user_in.username,
        password_hash=get_password_hash(user_in.password)
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # lost a race with another signup for the same name
        session.rollback()
        raise AlreadyExists()
    session.refresh(user)

    logger.info("User %s signed up", user.id)
    return _auth_response(user)


@router.post("/signin", response_model=AuthResponse, summary="Sign in with username and password")
def signin(
    user_in: UserCredentials,
    session: Annotated[Session, Depends(get_session)]
) -> dict:
    """Verify credentials and issue a token"""
    result = session.execute(
        select(User).where(User.username == user_in.username)
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(user_in.password, user.password_hash):
        raise InvalidCredentials()

    return _auth_response(user)
