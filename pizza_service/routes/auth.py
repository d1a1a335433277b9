"""
Auth Routes for JWT Pizza Service
=================================

Endpoints:
----------
- POST /api/auth: Register a new diner and log them in
- PUT /api/auth: Log in with email and password
- DELETE /api/auth: Log out (revoke the presented token)
- GET /api/auth/current: Profile of the token's user

Tokens are returned in the body and presented back as
``Authorization: Bearer <token>``. Register and login are rate limited per
client address (``RATE_LIMIT_AUTH``).

Usage:
------
    POST /api/auth
    {"name": "pizza diner", "email": "d@jwt.com", "password": "diner"}

    200 {"user": {"id": 2, "name": "pizza diner", "email": "d@jwt.com",
                  "roles": [{"role": "diner"}]},
         "token": "eyJhbGciOi..."}
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from ..auth import end_session, get_current_session, get_current_user
from ..config import RATE_LIMIT_ENABLED, get_rate_limit_auth
from ..db import get_db
from ..models import AuthSession, User
from ..schemas.auth import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, UserOut
from ..services import users as user_service

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


auth_router = APIRouter(prefix="/api/auth", tags=["Auth"])


@auth_router.post("", response_model=AuthResponse)
@limiter.limit(get_rate_limit_auth)
def register(
    request: Request,
    payload: Optional[RegisterRequest] = Body(None),
    db: Session = Depends(get_db),
) -> AuthResponse:
    """Register a new user with the diner role."""
    payload = payload or RegisterRequest()
    user, token = user_service.register(db, payload.name, payload.email, payload.password)
    return AuthResponse(user=user_service.serialize_user(user), token=token)


@auth_router.put("", response_model=AuthResponse)
@limiter.limit(get_rate_limit_auth)
def login(
    request: Request,
    payload: Optional[LoginRequest] = Body(None),
    db: Session = Depends(get_db),
) -> AuthResponse:
    """Log in an existing user."""
    payload = payload or LoginRequest()
    user, token = user_service.login(db, payload.email, payload.password)
    return AuthResponse(user=user_service.serialize_user(user), token=token)


@auth_router.delete("", response_model=MessageResponse)
def logout(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Revoke the presented token."""
    end_session(db, session)
    return MessageResponse(message="logout successful")


@auth_router.get("/current", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)) -> UserOut:
    return user_service.serialize_user(user)
