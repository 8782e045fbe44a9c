"""
API Gateway

Single entry point in front of the users, products, inventory and orders
services. Every request under a known ``/api/<resource>`` prefix is routed
to its backend with the path unchanged. When the caller has logged in with
an OIDC ID token, the token is relayed to the backend as a bearer
credential.

Endpoints:
    POST /auth/session: Log in with an OIDC ID token
    DELETE /auth/session: Log out
    GET /token: Debug echo of the session's ID token (GATEWAY_TOKEN_DEBUG only)
    GET /healthz: Health check endpoint for orchestration systems
    * /api/{users|products|inventory|orders}/**: Proxied to the backend
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.responses import Response
from jose import JWTError
from starlette.middleware.sessions import SessionMiddleware

from services.common.logging_config import configure_logging
from services.common.problems import register_error_handlers
from services.common.schemas import CamelModel
from services.common.tokens import decode_id_token
from . import config
from .filters import CallerIdentity, apply_filters
from .proxy import build_proxy_request, forward
from .routes import ServiceRegistry, resolve_route
from .session import clear_identity, get_caller_identity, identity_from_claims, store_identity

configure_logging()
logger = logging.getLogger(__name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with httpx.AsyncClient(timeout=config.TIMEOUT_SECONDS) as client:
        app.state.http_client = client
        yield


app = FastAPI(title="api-gateway", lifespan=lifespan)
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET_KEY,
    session_cookie=config.SESSION_COOKIE,
)
register_error_handlers(app)

registry = ServiceRegistry(config.SERVICE_URLS)


class SessionLogin(CamelModel):
    """Schema for logging in with an ID token from the identity provider."""
    id_token: str


class SessionInfo(CamelModel):
    """Identity established for the session, without the token itself."""
    subject: str
    email: Optional[str] = None


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency returning the shared outbound HTTP client."""
    return request.app.state.http_client


def get_registry() -> ServiceRegistry:
    return registry


@app.get("/healthz", response_model=dict)
def health():
    """Health check endpoint for the gateway."""
    return {"status": "healthy"}

@app.post("/auth/session", response_model=SessionInfo)
def login(payload: SessionLogin, request: Request):
    """
    Start an authenticated session from an OIDC ID token.

    Raises:
        HTTPException: 401 if the token fails verification
    """
    try:
        claims = decode_id_token(payload.id_token)
    except JWTError as e:
        logger.warning(f"Rejected ID token at login: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid ID token",
        )
    if claims.get("sub") is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="ID token has no subject")

    identity = identity_from_claims(claims, payload.id_token)
    store_identity(request, identity)
    logger.info(f"Session started for subject {identity.subject}")
    return SessionInfo(subject=identity.subject, email=identity.email)

@app.delete("/auth/session", status_code=status.HTTP_204_NO_CONTENT)
def logout(request: Request):
    """End the caller's session."""
    clear_identity(request)

@app.get("/token")
def get_token(identity: Optional[CallerIdentity] = Depends(get_caller_identity)):
    """
    Echo the session's ID token. For debugging only.

    Raises:
        HTTPException: 404 unless GATEWAY_TOKEN_DEBUG is enabled
    """
    if not config.TOKEN_DEBUG:
        raise HTTPException(status_code=404, detail="Not Found")
    if identity is None or not identity.is_federated or not identity.id_token:
        return {"error": "User not authenticated or not an OIDC user"}
    return {"id_token": identity.id_token}

@app.api_route("/{full_path:path}", methods=PROXY_METHODS)
async def proxy(
    request: Request,
    identity: Optional[CallerIdentity] = Depends(get_caller_identity),
    client: httpx.AsyncClient = Depends(get_http_client),
    services: ServiceRegistry = Depends(get_registry),
) -> Response:
    """
    Route a request to its backend service.

    Raises:
        HTTPException: 404 if no route matches the path
        HTTPException: 502 if the backend is unknown or unreachable
        HTTPException: 504 if the backend times out
    """
    path = request.url.path
    route = resolve_route(path)
    if route is None:
        raise HTTPException(status_code=404, detail=f"No route for path {path}")

    base_url = services.resolve(route.service)
    if base_url is None:
        logger.error(f"No address registered for service {route.service}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Service {route.service} is not registered")

    outbound = await build_proxy_request(request, base_url)
    outbound = apply_filters(outbound, identity)
    logger.info(
        f"Routing {request.method} {path} -> {route.service} "
        f"({'authenticated' if identity is not None else 'anonymous'})"
    )
    return await forward(client, outbound)
