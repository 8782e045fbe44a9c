"""
Forwarding of requests to backend services.

One attempt is made per request. Transport failures become gateway errors
(502 for an unreachable backend, 504 for a timeout); any response the
backend does return is passed back unchanged apart from hop-by-hop headers.
"""
import logging
from typing import List, Tuple

import httpx
from fastapi import HTTPException, Request, status
from fastapi.responses import Response

from .filters import ProxyRequest

logger = logging.getLogger(__name__)

# Headers that describe a single connection and are never forwarded
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "trailers",
    "transfer-encoding",
    "upgrade",
}

# Recomputed for the outbound request
REQUEST_EXCLUDED_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length"}

# httpx already decoded the body
RESPONSE_EXCLUDED_HEADERS = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


def _filter_headers(headers: List[Tuple[str, str]], excluded: set) -> List[Tuple[str, str]]:
    # options named in Connection are hop-by-hop as well
    excluded = excluded | {
        name.strip().lower()
        for key, value in headers
        if key.lower() == "connection"
        for name in value.split(",")
    }
    return [(key, value) for key, value in headers if key.lower() not in excluded]


async def build_proxy_request(request: Request, base_url: str) -> ProxyRequest:
    """
    Build the outbound request for a backend, keeping the path and query unchanged.

    Args:
        request: Incoming gateway request
        base_url: Base URL of the backend chosen by the router

    Returns:
        ProxyRequest addressed to the backend
    """
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else request.url.path
    url = base_url + path
    query = request.url.query
    if query:
        url = f"{url}?{query}"

    return ProxyRequest(
        method=request.method,
        url=url,
        headers=_filter_headers(request.headers.items(), REQUEST_EXCLUDED_HEADERS),
        content=await request.body(),
    )


async def forward(client: httpx.AsyncClient, outbound: ProxyRequest) -> Response:
    """
    Send a request to its backend and relay the response.

    Raises:
        HTTPException: 504 on timeout, 502 for any other failure to get a response
    """
    try:
        upstream = await client.request(
            outbound.method,
            outbound.url,
            headers=outbound.headers,
            content=outbound.content,
        )
    except httpx.TimeoutException as e:
        logger.warning(f"Backend timed out for {outbound.method} {outbound.url}: {e}")
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Backend service timed out")
    except httpx.HTTPError as e:
        logger.warning(f"Backend failed for {outbound.method} {outbound.url}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Backend service unavailable")

    response = Response(content=upstream.content, status_code=upstream.status_code)
    # raw header list keeps repeated headers such as Set-Cookie
    for key, value in _filter_headers(upstream.headers.multi_items(), RESPONSE_EXCLUDED_HEADERS):
        response.headers.append(key, value)
    return response
