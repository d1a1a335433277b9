"""
Public Routes for JWT Pizza Service
===================================

Endpoints that need no authentication and describe the service itself.

Endpoints:
----------
- GET /: Welcome message and version
- GET /health: Liveness check
- GET /api/docs: Every API endpoint with its method, path, whether it needs
  a bearer token, and its one-line description

The docs listing is read from the app's OpenAPI schema, so it never drifts
from what the app actually serves. An operation needs a bearer token when
its schema entry carries a security requirement (every route depending on
``get_current_session`` does, through ``HTTPBearer``).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Request

from .. import config


public_router = APIRouter(tags=["Public"])


def describe_endpoints(openapi_schema: Dict[str, Any]) -> List[Dict[str, Any]]:
    endpoints = []
    for path, operations in openapi_schema.get("paths", {}).items():
        if not path.startswith("/api/"):
            continue
        for method, operation in sorted(operations.items()):
            text = operation.get("description") or operation.get("summary") or ""
            lines = text.strip().splitlines()
            endpoints.append({
                "method": method.upper(),
                "path": path,
                "requiresAuth": bool(operation.get("security")),
                "description": lines[0] if lines else "",
            })
    return endpoints


@public_router.get("/", include_in_schema=False)
def root() -> Dict[str, Any]:
    return {"message": "welcome to JWT Pizza", "version": config.VERSION}


@public_router.get("/health")
def health_check() -> Dict[str, str]:
    return {"status": "ok"}


@public_router.get("/api/docs")
def api_docs(request: Request) -> Dict[str, Any]:
    """List the service's API endpoints."""
    return {
        "version": config.VERSION,
        "endpoints": describe_endpoints(request.app.openapi()),
        "config": {"factory": config.FACTORY_URL},
    }
