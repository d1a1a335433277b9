"""
Franchise Routes for JWT Pizza Service
======================================

Endpoints:
----------
- GET /api/franchise: List franchises (public, paginated)
- GET /api/franchise/{user_id}: Franchises a user administers
- POST /api/franchise: Create a franchise (admin)
- PUT /api/franchise/{franchise_id}: Update a franchise (admin)
- DELETE /api/franchise/{franchise_id}: Delete a franchise (admin)
- POST /api/franchise/{franchise_id}/store: Create a store (admin or franchisee)
- DELETE /api/franchise/{franchise_id}/store/{store_id}: Delete a store (admin or franchisee)

Pagination:
-----------
``page`` starts at 0, ``limit`` defaults to 10, and ``name`` filters by name
with ``*`` as a wildcard. The response's ``more`` flag is true when another
page exists.

Usage:
------
    POST /api/franchise
    {"name": "pizzaPocket", "admins": [{"email": "f@jwt.com"}]}

    200 {"id": 1, "name": "pizzaPocket",
         "admins": [{"id": 3, "name": "pizza franchisee", "email": "f@jwt.com"}],
         "stores": []}
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import config
from ..auth import get_current_user
from ..db import get_db
from ..models import User
from ..schemas.auth import MessageResponse
from ..schemas.franchises import (
    FranchiseCreate,
    FranchiseListResponse,
    FranchiseOut,
    FranchiseUpdate,
    FranchiseUpdateResponse,
    StoreCreate,
    StoreDetailOut,
)
from ..services import franchises as franchise_service


franchise_router = APIRouter(prefix="/api/franchise", tags=["Franchises"])


# =============================================================================
# Franchise Endpoints
# =============================================================================

@franchise_router.get("", response_model=FranchiseListResponse)
def list_franchises(
    page: int = Query(0, ge=0),
    limit: int = Query(config.FRANCHISE_PAGE_LIMIT, ge=1, le=100),
    name: str = Query("*"),
    db: Session = Depends(get_db),
) -> FranchiseListResponse:
    franchises, more = franchise_service.list_franchises(db, page=page, limit=limit, name=name)
    return FranchiseListResponse(franchises=franchises, more=more)


@franchise_router.get("/{user_id}", response_model=List[FranchiseOut])
def list_user_franchises(
    user_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> List[FranchiseOut]:
    return franchise_service.get_user_franchises(db, user, user_id)


@franchise_router.post("", response_model=FranchiseOut)
def create_franchise(
    payload: FranchiseCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FranchiseOut:
    return franchise_service.create_franchise(
        db,
        user,
        name=payload.name,
        admin_emails=[a.email for a in payload.admins],
    )


@franchise_router.put("/{franchise_id}", response_model=FranchiseUpdateResponse)
def update_franchise(
    franchise_id: int,
    payload: FranchiseUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FranchiseUpdateResponse:
    admin_emails = None if payload.admins is None else [a.email for a in payload.admins]
    franchise = franchise_service.update_franchise(
        db,
        user,
        franchise_id,
        name=payload.name,
        admin_emails=admin_emails,
    )
    return FranchiseUpdateResponse(franchise=franchise)


@franchise_router.delete("/{franchise_id}", response_model=MessageResponse)
def delete_franchise(
    franchise_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    franchise_service.delete_franchise(db, user, franchise_id)
    return MessageResponse(message="franchise deleted")


# =============================================================================
# Store Endpoints
# =============================================================================

@franchise_router.post("/{franchise_id}/store", response_model=StoreDetailOut)
def create_store(
    franchise_id: int,
    payload: StoreCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StoreDetailOut:
    return franchise_service.create_store(db, user, franchise_id, payload.name)


@franchise_router.delete("/{franchise_id}/store/{store_id}", response_model=MessageResponse)
def delete_store(
    franchise_id: int,
    store_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    franchise_service.delete_store(db, user, franchise_id, store_id)
    return MessageResponse(message="store deleted")
