"""
Authentication Module for JWT Pizza Service
===========================================

This module issues and validates the bearer tokens used by every protected
endpoint, and hashes user passwords.

Token Model:
------------
Tokens are compact JWS strings (``header.payload.signature``) signed with
``config.JWT_SECRET``. The payload identifies the user (``sub``, ``name``,
``email``) and carries a random ``jti`` so that every issued token is unique.

A valid signature alone is not enough. Each issued token is registered as an
``AuthSession`` row keyed by its signature segment; logout deletes the row,
and a token whose row is gone is rejected even though it still verifies.

Roles are never read from the token. ``get_current_user`` returns the
``User`` row, and authorization checks use the grants loaded from the
database for that request.

Usage:
------
    from pizza_service.auth import get_current_user

    @router.get("/me")
    def me(user: User = Depends(get_current_user)):
        return serialize_user(user)

The dependency raises ``AuthError`` (401 ``{"message": "unauthorized"}``)
when the header is missing, the token does not verify, or the session has
been revoked.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from . import config
from .db import get_db
from .exceptions import AuthError
from .models import AuthSession, User


logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches our handler as AuthError (401)
# instead of FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# =============================================================================
# Tokens
# =============================================================================

def token_signature(token: str) -> str:
    """Return the signature segment, which keys the session registry."""
    return token.rsplit(".", 1)[-1]


def create_token(user: User) -> str:
    now = datetime.now(timezone.utc)
    claims: Dict[str, Any] = {
        "sub": str(user.id),
        "name": user.name,
        "email": user.email,
        "iat": int(now.timestamp()),
        "jti": secrets.token_urlsafe(16),
    }
    if config.JWT_EXPIRE_MINUTES > 0:
        claims["exp"] = now + timedelta(minutes=config.JWT_EXPIRE_MINUTES)
    return jwt.encode(claims, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Verify the signature (and expiry, if present) and return the claims."""
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise AuthError() from exc


# =============================================================================
# Session Registry
# =============================================================================

def start_session(db: Session, user: User) -> str:
    """Issue a token for ``user`` and register it as a live session."""
    token = create_token(user)
    db.add(AuthSession(user_id=user.id, token_signature=token_signature(token)))
    db.commit()
    logger.info("Session started for user %d", user.id)
    return token


def end_session(db: Session, session: AuthSession) -> None:
    user_id = session.user_id
    db.delete(session)
    db.commit()
    logger.info("Session ended for user %d", user_id)


def lookup_session(db: Session, token: str) -> AuthSession:
    """Resolve a presented token to its live session, or raise AuthError."""
    claims = decode_token(token)
    session = (
        db.query(AuthSession)
        .filter(AuthSession.token_signature == token_signature(token))
        .first()
    )
    if session is None or str(session.user_id) != str(claims.get("sub")):
        raise AuthError()
    if session.user is None:
        raise AuthError()
    return session


# =============================================================================
# FastAPI Dependencies
# =============================================================================

def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthSession:
    if credentials is None or not credentials.credentials:
        raise AuthError()
    return lookup_session(db, credentials.credentials)


def get_current_user(session: AuthSession = Depends(get_current_session)) -> User:
    return session.user
