"""
Schemas Package for JWT Pizza Service
=====================================

Pydantic models for request validation and response serialization.

Naming Conventions:
-------------------
- *Out: Response models - what the API returns
- *Create: Request bodies for creation
- *Update: Partial-update bodies
- *Request / *Response: Other request and response envelopes
"""

from .auth import (
    RegisterRequest,
    LoginRequest,
    UserUpdate,
    UserOut,
    AuthResponse,
    MessageResponse,
    UserListStub,
)
from .franchises import (
    StoreOut,
    StoreDetailOut,
    StoreCreate,
    FranchiseAdminRef,
    FranchiseAdminOut,
    FranchiseSummaryOut,
    FranchiseOut,
    FranchiseListResponse,
    FranchiseCreate,
    FranchiseUpdate,
    FranchiseUpdateResponse,
)
from .menu import MenuItemOut, MenuItemCreate
from .orders import (
    OrderItemIn,
    OrderItemOut,
    OrderCreate,
    OrderOut,
    OrderListResponse,
    OrderCreateResponse,
)

__all__ = [
    # Auth / users
    "RegisterRequest",
    "LoginRequest",
    "UserUpdate",
    "UserOut",
    "AuthResponse",
    "MessageResponse",
    "UserListStub",
    # Franchises
    "StoreOut",
    "StoreDetailOut",
    "StoreCreate",
    "FranchiseAdminRef",
    "FranchiseAdminOut",
    "FranchiseSummaryOut",
    "FranchiseOut",
    "FranchiseListResponse",
    "FranchiseCreate",
    "FranchiseUpdate",
    "FranchiseUpdateResponse",
    # Menu
    "MenuItemOut",
    "MenuItemCreate",
    # Orders
    "OrderItemIn",
    "OrderItemOut",
    "OrderCreate",
    "OrderOut",
    "OrderListResponse",
    "OrderCreateResponse",
]
