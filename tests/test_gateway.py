"""
Tests for the API gateway: routing, identity relay and proxy failures.
"""
import json

import httpx
import pytest

from conftest import make_id_token
from services.gateway.app import config, main
from services.gateway.app.routes import ServiceRegistry


def _login(client, token):
    response = client.post("/auth/session", json={"idToken": token})
    assert response.status_code == 200, response.text
    return response


def test_authenticated_request_reaches_backend_with_bearer_token(gateway_client, backend, id_token):
    _login(gateway_client, id_token)

    response = gateway_client.get("/api/orders/42")

    assert response.status_code == 200
    assert backend.last.url.host == "order-service"
    assert backend.last.url.path == "/api/orders/42"
    assert backend.last.headers["authorization"] == f"Bearer {id_token}"


def test_anonymous_request_reaches_backend_without_credential(gateway_client, backend):
    response = gateway_client.get("/api/orders/42")

    assert response.status_code == 200
    assert backend.last.url.path == "/api/orders/42"
    assert "authorization" not in backend.last.headers


def test_session_token_replaces_client_authorization_header(gateway_client, backend, id_token):
    _login(gateway_client, id_token)

    gateway_client.get("/api/orders", headers={"Authorization": "Bearer stale"})

    assert backend.last.headers.get_list("authorization") == [f"Bearer {id_token}"]


def test_anonymous_request_is_forwarded_unmodified(gateway_client, backend):
    gateway_client.get("/api/orders", headers={"Authorization": "Bearer client-supplied", "X-Trace": "t-1"})

    assert backend.last.headers["authorization"] == "Bearer client-supplied"
    assert backend.last.headers["x-trace"] == "t-1"


def test_hop_by_hop_headers_are_not_forwarded(gateway_client, backend):
    gateway_client.get(
        "/api/orders",
        headers={
            "Proxy-Authorization": "Basic c2VjcmV0",
            "Keep-Alive": "timeout=5",
            "Connection": "keep-alive, X-Secret",
            "X-Secret": "internal",
            "X-Trace": "t-1",
        },
    )

    forwarded = backend.last.headers
    assert "proxy-authorization" not in forwarded
    assert "keep-alive" not in forwarded
    assert "x-secret" not in forwarded
    assert forwarded["x-trace"] == "t-1"
    assert forwarded["host"] == "order-service"


@pytest.mark.parametrize(
    "path,host",
    [
        ("/api/users", "user-backend"),
        ("/api/users/by-name/alice", "user-backend"),
        ("/api/products/WID-1", "product-service"),
        ("/api/inventory/quantity/ABC", "inventory-service"),
        ("/api/orders", "order-service"),
    ],
)
def test_routes_by_path_prefix(gateway_client, backend, path, host):
    gateway_client.get(path)

    assert backend.last.url.host == host
    assert backend.last.url.path == path


def test_method_query_and_body_are_forwarded(gateway_client, backend):
    gateway_client.post("/api/inventory?dryRun=true", json={"sku": "ABC", "quantity": 5})

    assert backend.last.method == "POST"
    assert backend.last.url.params["dryRun"] == "true"
    assert json.loads(backend.last.content) == {"sku": "ABC", "quantity": 5}
    assert backend.last.headers["content-type"] == "application/json"


def test_backend_response_is_relayed_unchanged(gateway_client, backend):
    backend.responder = lambda request: httpx.Response(
        409,
        json={"title": "Conflict", "status": 409},
        headers={"Content-Type": "application/problem+json", "X-Backend": "users"},
    )

    response = gateway_client.post("/api/users", json={"name": "A", "email": "a@example.com"})

    assert response.status_code == 409
    assert response.json() == {"title": "Conflict", "status": 409}
    assert response.headers["content-type"] == "application/problem+json"
    assert response.headers["x-backend"] == "users"


@pytest.mark.parametrize("path", ["/api/payments/1", "/api/usersettings", "/", "/api"])
def test_unrouted_path_is_not_found(gateway_client, backend, path):
    response = gateway_client.get(path)

    assert response.status_code == 404
    assert backend.requests == []


def test_unreachable_backend_is_bad_gateway(gateway_client, backend):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    backend.responder = refuse

    response = gateway_client.get("/api/products")

    assert response.status_code == 502
    assert response.json()["title"] == "Bad Gateway"


def test_undecodable_backend_response_is_bad_gateway(gateway_client, backend):
    backend.responder = lambda request: httpx.Response(
        200, content=b"not gzip", headers={"Content-Encoding": "gzip"}
    )

    response = gateway_client.get("/api/products")

    assert response.status_code == 502
    assert response.json()["title"] == "Bad Gateway"


def test_unregistered_service_is_bad_gateway(gateway_client, backend):
    main.app.dependency_overrides[main.get_registry] = lambda: ServiceRegistry({})

    response = gateway_client.get("/api/orders/42")

    assert response.status_code == 502
    assert response.json()["detail"] == "Service order-service is not registered"
    assert backend.requests == []


def test_backend_timeout_is_gateway_timeout(gateway_client, backend):
    def hang(request):
        raise httpx.ReadTimeout("timed out", request=request)

    backend.responder = hang

    response = gateway_client.get("/api/products")

    assert response.status_code == 504


def test_login_with_invalid_token_is_rejected(gateway_client, backend):
    response = gateway_client.post("/auth/session", json={"idToken": make_id_token(secret="wrong")})

    assert response.status_code == 401
    gateway_client.get("/api/orders")
    assert "authorization" not in backend.last.headers


def test_login_returns_session_identity(gateway_client, id_token):
    response = _login(gateway_client, id_token)

    assert response.json() == {"subject": "user-1", "email": "alice@example.com"}


def test_logout_stops_relaying_token(gateway_client, backend, id_token):
    _login(gateway_client, id_token)

    assert gateway_client.delete("/auth/session").status_code == 204
    gateway_client.get("/api/orders")

    assert "authorization" not in backend.last.headers


def test_token_debug_endpoint(gateway_client, id_token):
    assert gateway_client.get("/token").json() == {"error": "User not authenticated or not an OIDC user"}

    _login(gateway_client, id_token)

    assert gateway_client.get("/token").json() == {"id_token": id_token}


def test_token_debug_endpoint_disabled(gateway_client, monkeypatch):
    monkeypatch.setattr(config, "TOKEN_DEBUG", False)

    assert gateway_client.get("/token").status_code == 404


def test_health(gateway_client, backend):
    assert gateway_client.get("/healthz").json() == {"status": "healthy"}
    assert backend.requests == []
