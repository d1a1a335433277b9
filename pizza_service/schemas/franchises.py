"""
Franchise and Store Schemas for JWT Pizza Service
=================================================

Endpoint Coverage:
------------------
- GET /api/franchise: public listing (FranchiseListResponse)
- GET /api/franchise/{userId}: franchises a user administers (FranchiseOut)
- POST /api/franchise: create (FranchiseCreate -> FranchiseOut)
- PUT /api/franchise/{id}: update (FranchiseUpdate -> FranchiseUpdateResponse)
- POST /api/franchise/{id}/store: create store (StoreCreate -> StoreDetailOut)

Franchise admins are referenced by email when creating or updating a
franchise, and returned as ``{id, name, email}``.
"""

from typing import List, Optional

from .base import CamelModel


class StoreOut(CamelModel):
    id: int
    name: str


class StoreDetailOut(CamelModel):
    id: int
    franchise_id: int
    name: str


class StoreCreate(CamelModel):
    name: str


class FranchiseAdminRef(CamelModel):
    email: str


class FranchiseAdminOut(CamelModel):
    id: int
    name: str
    email: str


class FranchiseSummaryOut(CamelModel):
    id: int
    name: str
    stores: List[StoreOut] = []


class FranchiseOut(CamelModel):
    id: int
    name: str
    admins: List[FranchiseAdminOut] = []
    stores: List[StoreOut] = []


class FranchiseListResponse(CamelModel):
    franchises: List[FranchiseSummaryOut]
    more: bool


class FranchiseCreate(CamelModel):
    name: str
    admins: List[FranchiseAdminRef] = []


class FranchiseUpdate(CamelModel):
    """Only provided fields are changed. ``admins`` replaces the admin set."""
    name: Optional[str] = None
    admins: Optional[List[FranchiseAdminRef]] = None


class FranchiseUpdateResponse(CamelModel):
    franchise: FranchiseOut
