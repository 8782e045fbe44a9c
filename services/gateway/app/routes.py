"""
Static route table of the API gateway.

Each route maps a path prefix to the logical name of a backend service. A
route for ``/api/users`` matches ``/api/users`` itself and everything below
``/api/users/``, but not ``/api/usersettings``.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel


class Route(BaseModel):
    """A prefix rule pointing at a logical backend service."""
    id: str
    prefix: str
    service: str

    def matches(self, path: str) -> bool:
        return path == self.prefix or path.startswith(self.prefix + "/")


ROUTES: List[Route] = [
    Route(id="user-service", prefix="/api/users", service="user-backend"),
    Route(id="product-service", prefix="/api/products", service="product-service"),
    Route(id="inventory-service", prefix="/api/inventory", service="inventory-service"),
    Route(id="order-service", prefix="/api/orders", service="order-service"),
]


def resolve_route(path: str, routes: Optional[List[Route]] = None) -> Optional[Route]:
    """
    Find the route for a request path.

    Args:
        path: Request path, without query string
        routes: Route table to search (default: ROUTES)

    Returns:
        The matching route with the longest prefix, or None
    """
    candidates = [route for route in (routes if routes is not None else ROUTES) if route.matches(path)]
    if not candidates:
        return None
    return max(candidates, key=lambda route: len(route.prefix))


class ServiceRegistry:
    """Resolves logical service names to base URLs."""

    def __init__(self, urls: Dict[str, str]):
        self._urls = {name: url.rstrip("/") for name, url in urls.items()}

    def resolve(self, service: str) -> Optional[str]:
        return self._urls.get(service)
