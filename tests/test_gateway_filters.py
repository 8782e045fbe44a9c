"""
Unit tests for the gateway's route table and request filters.
"""
from services.gateway.app.filters import CallerIdentity, ProxyRequest, apply_filters, relay_id_token
from services.gateway.app.routes import Route, ServiceRegistry, resolve_route

REQUEST = ProxyRequest(
    method="GET",
    url="http://order-service:8083/api/orders/42",
    headers=[("Accept", "application/json"), ("authorization", "Bearer old")],
)


def test_relay_sets_bearer_for_federated_identity():
    identity = CallerIdentity(subject="u1", id_token="tok")

    relayed = relay_id_token(REQUEST, identity)

    assert relayed.header("Authorization") == "Bearer tok"
    assert [key for key, _ in relayed.headers if key.lower() == "authorization"] == ["Authorization"]
    assert relayed.header("Accept") == "application/json"
    assert relayed.method == REQUEST.method
    assert relayed.url == REQUEST.url
    assert relayed.content == REQUEST.content


def test_relay_leaves_request_untouched_without_token():
    assert relay_id_token(REQUEST, None) is REQUEST
    assert relay_id_token(REQUEST, CallerIdentity(subject="u1")) is REQUEST
    assert relay_id_token(REQUEST, CallerIdentity(subject="u1", provider="basic", id_token="tok")) is REQUEST


def test_relay_does_not_mutate_original_request():
    relay_id_token(REQUEST, CallerIdentity(subject="u1", id_token="tok"))

    assert REQUEST.header("authorization") == "Bearer old"


def test_apply_filters_runs_in_order():
    calls = []

    def first(request, identity):
        calls.append("first")
        return request.model_copy(update={"headers": request.headers + [("X-First", "1")]})

    def second(request, identity):
        calls.append("second")
        assert request.header("X-First") == "1"
        return request

    result = apply_filters(REQUEST, None, filters=[first, second])

    assert calls == ["first", "second"]
    assert result.header("X-First") == "1"


def test_default_pipeline_relays_identity():
    result = apply_filters(REQUEST, CallerIdentity(subject="u1", id_token="tok"))

    assert result.header("authorization") == "Bearer tok"


def test_resolve_route_matches_prefix_boundaries():
    assert resolve_route("/api/orders").service == "order-service"
    assert resolve_route("/api/orders/42").service == "order-service"
    assert resolve_route("/api/ordersx") is None
    assert resolve_route("/other/api/orders") is None


def test_resolve_route_prefers_longest_prefix():
    routes = [
        Route(id="all", prefix="/api/users", service="user-backend"),
        Route(id="admin", prefix="/api/users/admin", service="admin-backend"),
    ]

    assert resolve_route("/api/users/admin/1", routes).id == "admin"
    assert resolve_route("/api/users/1", routes).id == "all"


def test_registry_resolves_logical_names():
    registry = ServiceRegistry({"order-service": "http://orders:8083/"})

    assert registry.resolve("order-service") == "http://orders:8083"
    assert registry.resolve("missing") is None
