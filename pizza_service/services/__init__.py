"""
Services Package for JWT Pizza Service
======================================

Business logic behind the routes. Services take a SQLAlchemy session and the
authenticated ``User`` as arguments, raise the errors from
``pizza_service.exceptions``, and return schema objects ready to serialize.

Available Services:
-------------------
- **users**: registration, login, profile updates, role grants
- **franchises**: franchise and store CRUD
- **orders**: menu, order history, and order placement via the factory

Usage:
------
    from pizza_service.services import users, franchises, orders

    user, token = users.login(db, email, password)
"""

from . import users
from . import franchises
from . import orders

__all__ = ["users", "franchises", "orders"]
