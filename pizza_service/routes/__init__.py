"""
Routes Package for JWT Pizza Service
====================================

API route definitions organized by domain. Each module defines a FastAPI
APIRouter with its own prefix and tags.

**Public:**
- public.py: welcome, health check, endpoint docs

**API (``/api``):**
- auth.py: register, login, logout, current user
- users.py: profile read/update and the not-implemented user stubs
- franchises.py: franchise and store management
- orders.py: menu and order placement

Route Dependencies:
-------------------
- get_db: Database session
- get_current_user / get_current_session: bearer token authentication
- get_factory_client: the pizza factory client (orders only)

Error Handling:
---------------
Routes and services raise the errors in ``pizza_service.exceptions``; the
handlers in main.py turn them into ``{"message": ...}`` responses:
- 400: missing or malformed input
- 401: missing, invalid, or revoked token; bad credentials
- 403: authenticated but not allowed
- 404: unknown franchise, store, or user
- 429: too many register/login attempts
- 500: factory failure
"""

from .auth import auth_router, limiter
from .users import user_router
from .franchises import franchise_router
from .orders import order_router
from .public import public_router

__all__ = [
    "auth_router",
    "limiter",
    "user_router",
    "franchise_router",
    "order_router",
    "public_router",
]
