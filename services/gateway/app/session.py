"""
Caller identity held in the gateway's signed session cookie.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from pydantic import ValidationError

from .filters import CallerIdentity

logger = logging.getLogger(__name__)

SESSION_KEY = "identity"


def identity_from_claims(claims: Dict[str, Any], id_token: str) -> CallerIdentity:
    """Build a federated identity from verified ID-token claims."""
    return CallerIdentity(
        subject=str(claims["sub"]),
        email=claims.get("email"),
        provider="oidc",
        id_token=id_token,
    )


def store_identity(request: Request, identity: CallerIdentity) -> None:
    request.session[SESSION_KEY] = identity.model_dump()


def clear_identity(request: Request) -> None:
    request.session.clear()


def get_caller_identity(request: Request) -> Optional[CallerIdentity]:
    """
    FastAPI dependency returning the session's caller identity.

    Returns:
        The identity, or None for an anonymous caller
    """
    data = request.session.get(SESSION_KEY)
    if not data:
        return None
    try:
        return CallerIdentity.model_validate(data)
    except ValidationError:
        logger.warning("Discarding malformed identity in gateway session")
        clear_identity(request)
        return None
