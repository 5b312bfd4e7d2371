"""Business logic for authentication and registration."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Tuple
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..errors import AuthenticationError, AuthorizationError, ConflictError, UpstreamError
from ..models import User
from ..schemas import RegisterRequest
from ..security.secrets import MissingSecretError, require_secret, secret_matches
from .policy import Principal

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)
_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@lru_cache(maxsize=1)
def _get_jwt_secret() -> str:
    try:
        return require_secret("JWT_SECRET_KEY")
    except MissingSecretError as exc:
        raise RuntimeError(str(exc)) from exc


def hash_password(password: str) -> str:
    """Hash a plain-text password using bcrypt."""

    return _pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify that ``password`` matches ``hashed_password``."""

    try:
        return _pwd_context.verify(password, hashed_password)
    except Exception:  # pragma: no cover - passlib internal errors are rare
        logger.exception("Password verification failed due to an unexpected error")
        return False


def create_access_token(user: User, *, expires_minutes: Optional[int] = None) -> str:
    """Create a signed JWT carrying the user's id, role, name and email."""

    settings = get_settings()
    expire_delta = timedelta(minutes=expires_minutes or settings.jwt_expires_minutes)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "role": user.role,
        "name": user.name,
        "email": user.email,
        "exp": now + expire_delta,
        "iat": now,
    }
    return jwt.encode(payload, _get_jwt_secret(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Decode and validate a JWT, returning the embedded subject UUID."""

    try:
        payload = jwt.decode(token, _get_jwt_secret(), algorithms=[get_settings().jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise AuthenticationError("Unauthorized: Token expired") from exc
    except JWTError as exc:
        raise AuthenticationError("Unauthorized: Invalid token") from exc

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Unauthorized: Invalid token payload")
    try:
        return UUID(subject)
    except ValueError as exc:
        raise AuthenticationError("Unauthorized: Invalid token payload") from exc


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(db: Session, payload: RegisterRequest) -> Tuple[User, str]:
    """Persist a new user and return it with an access token."""

    email = _normalize_email(str(payload.email))
    existing = db.scalar(select(User).where(User.email == email))
    if existing:
        raise ConflictError("Email already in use")

    # Self-registration as admin requires the shared signup code.
    role = payload.role
    if role == "admin" and not secret_matches(payload.admin_code, get_settings().admin_signup_code):
        raise AuthorizationError("Invalid admin access code")

    user = User(
        name=payload.name.strip(),
        email=email,
        hashed_password=hash_password(payload.password),
        role=role,
        location=(payload.location or "").strip(),
        phone=(payload.phone or "").strip(),
    )

    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Email already in use") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to register user")
        raise UpstreamError("Unable to register user") from exc

    return user, create_access_token(user)


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Authenticate a user against stored credentials."""

    user = db.scalar(select(User).where(User.email == _normalize_email(email)))
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    db: Session = Depends(get_session),
) -> User:
    """Resolve the authenticated user from the provided bearer token."""

    if not credentials or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Unauthorized: Missing token")

    user_id = decode_access_token(credentials.credentials)

    user = db.get(User, user_id)
    if not user:
        raise AuthenticationError("Unauthorized: Invalid token")
    return user


async def get_current_principal(user: User = Depends(get_current_user)) -> Principal:
    """Snapshot of the caller passed explicitly into every service call."""

    return Principal.from_user(user)


def require_roles(*allowed_roles: str):
    normalized = {role.lower() for role in allowed_roles if role}

    async def _resolver(principal: Principal = Depends(get_current_principal)) -> Principal:
        if normalized and principal.role not in normalized:
            raise AuthorizationError("Forbidden: insufficient role")
        return principal

    return _resolver


__all__ = [
    "register_user",
    "authenticate_user",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
    "get_current_user",
    "get_current_principal",
    "require_roles",
]
