"""
Tests for the unauthenticated service endpoints and app-wide behavior.
"""

from pizza_service import config
from pizza_service.routes.public import describe_endpoints


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "welcome to JWT Pizza", "version": config.VERSION}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_endpoint(client):
    response = client.get("/api/nothing/here")

    assert response.status_code == 404
    assert response.json() == {"message": "unknown endpoint"}


def test_request_id_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_request_id_generated(client):
    assert client.get("/health").headers.get("X-Request-ID")


class TestApiDocs:
    def _endpoints(self, client):
        response = client.get("/api/docs")
        assert response.status_code == 200
        body = response.json()
        assert body["version"] == config.VERSION
        assert body["config"] == {"factory": config.FACTORY_URL}
        return {(e["method"], e["path"]): e for e in body["endpoints"]}

    def test_lists_every_api_endpoint(self, client):
        endpoints = self._endpoints(client)

        for key in [
            ("POST", "/api/auth"),
            ("PUT", "/api/auth"),
            ("DELETE", "/api/auth"),
            ("GET", "/api/user/me"),
            ("PUT", "/api/user/{user_id}"),
            ("GET", "/api/franchise"),
            ("POST", "/api/franchise/{franchise_id}/store"),
            ("GET", "/api/order/menu"),
            ("POST", "/api/order"),
        ]:
            assert key in endpoints

    def test_auth_requirement_is_reported(self, client):
        endpoints = self._endpoints(client)

        assert endpoints[("POST", "/api/auth")]["requiresAuth"] is False
        assert endpoints[("GET", "/api/order/menu")]["requiresAuth"] is False
        assert endpoints[("GET", "/api/franchise")]["requiresAuth"] is False
        assert endpoints[("DELETE", "/api/auth")]["requiresAuth"] is True
        assert endpoints[("POST", "/api/order")]["requiresAuth"] is True
        assert endpoints[("PUT", "/api/order/menu")]["requiresAuth"] is True

    def test_descriptions(self, client):
        endpoints = self._endpoints(client)
        assert endpoints[("POST", "/api/auth")]["description"] == "Register a new user with the diner role."

    def test_only_api_paths_are_listed(self, client):
        endpoints = self._endpoints(client)

        assert all(path.startswith("/api/") for _, path in endpoints)
        assert ("GET", "/health") not in endpoints


def test_describe_endpoints_reads_openapi_operations():
    schema = {
        "paths": {
            "/health": {"get": {"summary": "Health Check"}},
            "/api/thing": {
                "get": {"summary": "List Things"},
                "delete": {
                    "description": "Remove a thing.\n\nMore detail here.",
                    "security": [{"HTTPBearer": []}],
                },
            },
        }
    }

    assert describe_endpoints(schema) == [
        {"method": "DELETE", "path": "/api/thing", "requiresAuth": True, "description": "Remove a thing."},
        {"method": "GET", "path": "/api/thing", "requiresAuth": False, "description": "List Things"},
    ]
