"""
User Routes for JWT Pizza Service
=================================

Endpoints:
----------
- GET /api/user/me: Authenticated user's profile
- PUT /api/user/{user_id}: Update name/email/password (self or admin)
- GET /api/user/: Not implemented, returns an empty successful listing
- DELETE /api/user/{user_id}: Not implemented, returns success

The two "not implemented" endpoints are part of the public contract: clients
already call them, so they answer 200 with a fixed body rather than 404.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..db import get_db
from ..models import User
from ..schemas.auth import AuthResponse, MessageResponse, UserListStub, UserOut, UserUpdate
from ..services import users as user_service


user_router = APIRouter(prefix="/api/user", tags=["Users"])


@user_router.get("/me", response_model=UserOut)
def get_me(user: User = Depends(get_current_user)) -> UserOut:
    return user_service.serialize_user(user)


@user_router.put("/{user_id}", response_model=AuthResponse)
def update_user(
    user_id: int,
    payload: UserUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> AuthResponse:
    """Update a user. Returns the updated profile and a fresh token."""
    updated, token = user_service.update_user(
        db,
        actor=user,
        target_id=user_id,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(user=user_service.serialize_user(updated), token=token)


@user_router.get("/", response_model=UserListStub)
def list_users(_user: User = Depends(get_current_user)) -> UserListStub:
    return UserListStub()


@user_router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, _user: User = Depends(get_current_user)) -> MessageResponse:
    return MessageResponse(message="not implemented")
