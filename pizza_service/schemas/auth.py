"""
Auth and User Schemas for JWT Pizza Service
===========================================

Request and response bodies for /api/auth and /api/user.

Registration fields are declared optional on purpose: a missing field must
produce the service's own 400 message ("name, email, and password are
required") rather than a generic validation error.

Roles are serialized in their wire shape, e.g.
``[{"role": "diner"}, {"role": "franchisee", "objectId": 3}]``.
"""

from typing import Any, Dict, List, Optional

from .base import CamelModel


class RegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(CamelModel):
    """Any subset of fields; omitted fields are left unchanged."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    roles: List[Dict[str, Any]] = []


class AuthResponse(CamelModel):
    user: UserOut
    token: str


class MessageResponse(CamelModel):
    message: str


class UserListStub(CamelModel):
    message: str = "not implemented"
    users: List[UserOut] = []
    more: bool = False
