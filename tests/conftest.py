"""
Shared test configuration.

Every service runs against its own in-memory SQLite database. The
environment is fixed here, before any service module is imported, because
the services read their settings at import time.
"""
import importlib
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OIDC_SECRET_KEY"] = "test-oidc-secret"
os.environ["OIDC_ALGORITHM"] = "HS256"
os.environ["GATEWAY_TOKEN_DEBUG"] = "true"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ.pop("OIDC_ISSUER", None)
os.environ.pop("OIDC_AUDIENCE", None)

import httpx
import pytest
from fastapi.testclient import TestClient
from jose import jwt


def _service_client(name: str) -> TestClient:
    main = importlib.import_module(f"services.{name}.app.main")
    database = importlib.import_module(f"services.{name}.app.database")
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    return TestClient(main.app)


@pytest.fixture
def users_client():
    with _service_client("users") as client:
        yield client


@pytest.fixture
def products_client():
    with _service_client("products") as client:
        yield client


@pytest.fixture
def inventory_client():
    with _service_client("inventory") as client:
        yield client


@pytest.fixture
def orders_client():
    with _service_client("orders") as client:
        yield client


def make_id_token(sub="user-1", email="alice@example.com", expires_in=3600, secret="test-oidc-secret", **claims):
    """Issue an HS256 ID token the way the test identity provider would."""
    now = datetime.now(timezone.utc)
    payload = {"sub": sub, "email": email, "iat": now, "exp": now + timedelta(seconds=expires_in)}
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def id_token():
    return make_id_token()


class FakeBackend:
    """Records proxied requests and answers them with ``responder``."""

    def __init__(self):
        self.requests = []
        self.responder = lambda request: httpx.Response(
            200, json={"path": request.url.path}, headers={"X-Backend": "fake"}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def gateway_client(backend):
    from services.gateway.app import main

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(backend))
    main.app.dependency_overrides[main.get_http_client] = lambda: http_client
    with TestClient(main.app) as client:
        yield client
    main.app.dependency_overrides.clear()
