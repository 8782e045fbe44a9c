"""
Request filters applied by the gateway before a request is proxied.

A filter takes the outbound request and the caller's identity (or None for
an anonymous caller) and returns the request to send, which may be the same
object. Filters run in the fixed order of ``FILTERS``.
"""
from typing import Callable, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict


class CallerIdentity(BaseModel):
    """
    Identity of the caller as recorded in the gateway session.

    Attributes:
        subject: Subject claim of the caller's ID token
        email: Email claim, when present
        provider: How the caller authenticated; "oidc" for a federated login
        id_token: Raw ID token issued by the identity provider
    """
    subject: str
    email: Optional[str] = None
    provider: str = "oidc"
    id_token: Optional[str] = None

    @property
    def is_federated(self) -> bool:
        return self.provider == "oidc"


class ProxyRequest(BaseModel):
    """A request on its way to a backend service."""
    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    headers: List[Tuple[str, str]] = []
    content: bytes = b""

    def header(self, name: str) -> Optional[str]:
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None


RequestFilter = Callable[[ProxyRequest, Optional[CallerIdentity]], ProxyRequest]


def relay_id_token(request: ProxyRequest, identity: Optional[CallerIdentity]) -> ProxyRequest:
    """
    Attach the caller's ID token as the request's bearer credential.

    Any Authorization header already on the request is replaced. Anonymous
    callers, non-federated callers and sessions without a token pass through
    untouched.
    """
    if identity is None or not identity.is_federated or not identity.id_token:
        return request

    headers = [(key, value) for key, value in request.headers if key.lower() != "authorization"]
    headers.append(("Authorization", f"Bearer {identity.id_token}"))
    return request.model_copy(update={"headers": headers})


FILTERS: List[RequestFilter] = [relay_id_token]


def apply_filters(
    request: ProxyRequest,
    identity: Optional[CallerIdentity],
    filters: Optional[List[RequestFilter]] = None,
) -> ProxyRequest:
    """Run a request through the filter pipeline."""
    for request_filter in (filters if filters is not None else FILTERS):
        request = request_filter(request, identity)
    return request
