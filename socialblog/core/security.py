from datetime import datetime, timedelta, UTC
from typing import Annotated
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.orm import Session
from socialblog.core.config import Settings, get_settings
from socialblog.core.errors import Unauthorized
from socialblog.db.database import get_session
from socialblog.models.user import User
from socialblog.schemas.user import Identity

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# auto_error is off on both paths so a missing header raises our own Unauthorized
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/signin", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its stored hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password with a per-hash salt"""
    return pwd_context.hash(password)


def create_access_token(user: User, settings: Settings | None = None,
                        expires_delta: timedelta | None = None) -> str:
    """Sign a bearer token carrying the user's id and username"""
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {
        "sub": str(user.id),
        "id": user.id,
        "username": user.username,
        "exp": datetime.now(UTC) + expires_delta,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> dict | None:
    """Return the token payload, or None when the signature, expiry or shape is bad"""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if not isinstance(payload.get("id"), int) or not payload.get("username"):
        return None
    return payload


def _load_identity(token: str | None, session: Session) -> Identity | None:
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None

    user = session.execute(
        select(User).where(User.id == payload["id"])
    ).scalar_one_or_none()
    if user is None or user.username != payload["username"]:
        return None
    return Identity.model_validate(user)


def resolve_caller(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    session: Session = Depends(get_session)
) -> Identity | None:
    """Caller identity if a valid token was sent, otherwise anonymous (None)"""
    return _load_identity(token, session)


def require_caller(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    session: Session = Depends(get_session)
) -> Identity:
    """Caller identity, raising Unauthorized when absent or invalid"""
    identity = _load_identity(token, session)
    if identity is None:
        raise Unauthorized("Access token required" if not token else "Invalid token")
    return identity
