"""
Configuration Module for JWT Pizza Service
==========================================

This module centralizes all configuration settings, environment variables, and
constants used throughout the service. Values are parsed once at import time,
so tests that need different values patch the module attributes directly.

Configuration Categories:
-------------------------
- **Database**: SQLAlchemy connection URL.

- **Tokens**: Signing secret, algorithm, and optional expiry for the bearer
  tokens handed out at login/registration.

- **Factory**: Location and credentials of the external pizza factory that
  fulfills orders, plus the timeout for that single blocking call.

- **Rate Limiting**: Throttling for the register/login endpoints.

- **CORS Settings**: Allowed origins for the frontend.

- **Seeding**: Default admin account and starter menu created on an empty
  database.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (required, see db.py)
- JWT_SECRET: HMAC secret for signing tokens
- JWT_ALGORITHM: Signing algorithm (default: "HS256")
- JWT_EXPIRE_MINUTES: Token lifetime, 0 disables the exp claim (default: 0)
- FACTORY_URL: Base URL of the pizza factory
- FACTORY_API_KEY: Bearer key sent to the factory
- FACTORY_TIMEOUT_SECONDS: Timeout for the factory call (default: 10)
- RATE_LIMIT_AUTH: Auth endpoint rate limit (default: "20 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- SEED_ON_STARTUP: Seed admin and menu on an empty database (default: "true")
- DEFAULT_ADMIN_NAME / DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD

Usage:
------
    from pizza_service import config

    requests.post(f"{config.FACTORY_URL}/api/order", timeout=config.FACTORY_TIMEOUT_SECONDS)
"""

import os
from typing import List


VERSION = "1.0.0"


# =============================================================================
# Token Configuration
# =============================================================================

JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

# 0 means tokens stay valid until logout; sessions are the source of truth
JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", "0"))


# =============================================================================
# Factory Configuration
# =============================================================================
# The factory is an external HTTP service. Orders are forwarded to it once,
# synchronously, and the request handler waits for the answer.

FACTORY_URL: str = os.getenv("FACTORY_URL", "https://pizza-factory.cs329.click").rstrip("/")
FACTORY_API_KEY: str = os.getenv("FACTORY_API_KEY", "")
FACTORY_TIMEOUT_SECONDS: float = float(os.getenv("FACTORY_TIMEOUT_SECONDS", "10"))


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Format: "X per Y" where Y is second, minute, hour, or day

RATE_LIMIT_AUTH: str = os.getenv("RATE_LIMIT_AUTH", "20 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_auth() -> str:
    """Return the current auth rate limit (allows dynamic override in tests)."""
    return RATE_LIMIT_AUTH


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Pagination
# =============================================================================

FRANCHISE_PAGE_LIMIT: int = 10
ORDER_PAGE_SIZE: int = 10


# =============================================================================
# Seed Data Configuration
# =============================================================================
# On an empty database the service creates one global admin so that
# franchises and menu items can be managed at all.

SEED_ON_STARTUP: bool = os.getenv("SEED_ON_STARTUP", "true").lower() == "true"

DEFAULT_ADMIN_NAME: str = os.getenv("DEFAULT_ADMIN_NAME", "pizza admin")
DEFAULT_ADMIN_EMAIL: str = os.getenv("DEFAULT_ADMIN_EMAIL", "a@jwt.com")
DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin")

DEFAULT_MENU = [
    {"title": "Veggie", "description": "A garden of delight", "image": "pizza1.png", "price": 0.0038},
    {"title": "Pepperoni", "description": "Spicy treat", "image": "pizza2.png", "price": 0.0042},
    {"title": "Margarita", "description": "Essential classic", "image": "pizza3.png", "price": 0.0042},
    {"title": "Crusty", "description": "A dry mouthed favorite", "image": "pizza4.png", "price": 0.0028},
    {"title": "Charred Leopard", "description": "For those with a darker side", "image": "pizza5.png", "price": 0.0099},
]
