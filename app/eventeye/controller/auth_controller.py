import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import jwt
from sqlalchemy.orm import Session

from eventeye.core.config import settings
from eventeye.core.security import (
    hash_password, verify_password, create_access_token,
    decode_access_token, session_expiry, verify_google_id_token,
)
from eventeye.database import commit_or_fail
from eventeye.errors import AuthError, BackendError, ValidationError
from eventeye.models.user_model import AuthUser, AuthSession

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """The signed-in user and the session that authenticated the request."""
    user: AuthUser
    session: AuthSession
    access_token: str


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def _open_session(db: Session, user: AuthUser) -> SessionContext:
    session = AuthSession(user_id=user.id, expires_at=session_expiry())
    db.add(session)
    commit_or_fail(db, "sign in")
    db.refresh(session)
    token = create_access_token(user.id, session.id, session.expires_at)
    return SessionContext(user=user, session=session, access_token=token)


# ------------------ Sign Up ------------------
async def sign_up(db: Session, email: str, password: str, full_name: str, role: Optional[str] = None):
    if not full_name or not full_name.strip():
        raise ValidationError("Please enter your full name", ["full_name"])
    if not password:
        raise ValidationError("Please enter a password", ["password"])

    email = _normalize_email(email)
    if db.query(AuthUser).filter(AuthUser.email == email).first():
        raise BackendError("User already registered")

    user = AuthUser(
        email=email,
        password_hash=hash_password(password),
        provider="email",
        full_name=full_name.strip(),
        requested_role=role,
    )
    db.add(user)
    commit_or_fail(db, "create account")
    db.refresh(user)
    logger.info(f"New account {user.id} ({email})")
    return user


# ------------------ Sign In ------------------
async def sign_in(db: Session, email: str, password: str) -> SessionContext:
    user = db.query(AuthUser).filter(AuthUser.email == _normalize_email(email)).first()
    if not user or not verify_password(password, user.password_hash):
        raise BackendError("Invalid login credentials")
    return await _open_session(db, user)


# ------------------ Google Sign In ------------------
async def sign_in_with_google(db: Session, id_token: str) -> SessionContext:
    if not settings.GOOGLE_CLIENT_ID:
        raise BackendError("Google sign-in is not configured")
    try:
        claims = verify_google_id_token(id_token)
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected Google ID token: {e}")
        raise BackendError("Invalid login credentials") from e

    email = claims.get("email")
    if not email or not claims.get("email_verified", False):
        raise BackendError("Google account email is not verified")

    email = _normalize_email(email)
    user = db.query(AuthUser).filter(AuthUser.email == email).first()
    if not user:
        user = AuthUser(email=email, provider="google", full_name=claims.get("name"))
        db.add(user)
        commit_or_fail(db, "create account")
        db.refresh(user)
        logger.info(f"New Google account {user.id} ({email})")
    return await _open_session(db, user)


# ------------------ Sign Out ------------------
async def sign_out(db: Session, context: SessionContext):
    db.delete(context.session)
    commit_or_fail(db, "sign out")


# ------------------ Current Session ------------------
async def current_session(db: Session, token: Optional[str]) -> SessionContext:
    if not token:
        raise AuthError("Not signed in")
    payload = decode_access_token(token)
    if not payload:
        raise AuthError("Session is invalid or expired")

    session = db.query(AuthSession).filter(AuthSession.id == payload.get("jti")).first()
    if not session or session.user_id != payload.get("sub"):
        raise AuthError("Session has been signed out")
    if session.expires_at < datetime.utcnow():
        db.delete(session)
        commit_or_fail(db, "expire session")
        raise AuthError("Session is invalid or expired")

    return SessionContext(user=session.user, session=session, access_token=token)
