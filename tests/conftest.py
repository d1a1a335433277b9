import os

# db.py refuses to import without a URL; the engine is replaced per test below
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import pizza_service.db as db
from pizza_service.exceptions import FulfillmentError
from pizza_service.factory_client import FactoryClient, FactoryReceipt, get_factory_client
from pizza_service.main import app

# Seeded by the app's lifespan on an empty database
TEST_ADMIN_EMAIL = "a@jwt.com"
TEST_ADMIN_PASSWORD = "admin"


class FakeFactoryClient(FactoryClient):
    """Records submitted orders and answers like the real factory would."""

    def __init__(self):
        self.submitted = []
        self.fail = False
        self.error = None
        self.report_url = "https://factory.test/report/1"

    def submit_order(self, diner, order):
        self.submitted.append({"diner": diner, "order": order})
        if self.error is not None:
            raise self.error
        if self.fail:
            raise FulfillmentError(report_url=self.report_url)
        return FactoryReceipt(jwt=f"factory-jwt-{order['id']}", report_url=self.report_url)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the db module used by the app (lifespan creates tables and seeds here)
    db.engine = engine
    db.SessionLocal = TestingSessionLocal
    return TestingSessionLocal


@pytest.fixture
def db_session(client, session_factory):
    """A session on the same in-memory database the client uses."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def factory():
    return FakeFactoryClient()


@pytest.fixture
def client(session_factory, factory):
    """Shared FastAPI TestClient using an in-memory SQLite DB.

    Uses StaticPool so all connections share the same in-memory database.
    The pizza factory is replaced by FakeFactoryClient.
    """
    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db
    app.dependency_overrides[get_factory_client] = lambda: factory

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Helpers
# =============================================================================

def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def register_user(client, name="pizza diner", email="d@jwt.com", password="diner"):
    response = client.post(
        "/api/auth",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()


def login_user(client, email, password):
    response = client.put("/api/auth", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def admin_token(client):
    return login_user(client, TEST_ADMIN_EMAIL, TEST_ADMIN_PASSWORD)["token"]


@pytest.fixture
def diner(client):
    """A freshly registered diner: {"user": {...}, "token": "..."}."""
    return register_user(client)


@pytest.fixture
def franchise(client, admin_token, diner):
    """A franchise administered by the ``diner`` fixture's user, with one store."""
    response = client.post(
        "/api/franchise",
        json={"name": "pizzaPocket", "admins": [{"email": diner["user"]["email"]}]},
        headers=auth_header(admin_token),
    )
    assert response.status_code == 200, response.text
    created = response.json()

    store = client.post(
        f"/api/franchise/{created['id']}/store",
        json={"name": "SLC"},
        headers=auth_header(admin_token),
    )
    assert store.status_code == 200, store.text
    created["stores"] = [{"id": store.json()["id"], "name": "SLC"}]
    return created
