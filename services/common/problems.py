"""
Problem-detail error responses shared by the services.

Every error leaves a service as an ``application/problem+json`` body with
``type``, ``title``, ``status`` and ``detail`` members. Validation failures
add an ``errors`` object mapping each offending field to its message.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


class ConflictError(Exception):
    """
    Raised when a write would violate a uniqueness rule.

    Attributes:
        code: Machine-readable condition name, e.g. ``email_already_exists``
        detail: Human-readable explanation returned to the caller
    """

    def __init__(self, code: str, detail: Optional[str] = None):
        self.code = code
        self.detail = detail or code.replace("_", " ").capitalize() + "."
        super().__init__(code)


def problem_response(
    status_code: int,
    title: str,
    detail: Optional[str] = None,
    type_: str = "about:blank",
    headers: Optional[Dict[str, str]] = None,
    **extra: Any,
) -> JSONResponse:
    """Build a problem-detail JSON response."""
    body: Dict[str, Any] = {"type": type_, "title": title, "status": status_code}
    if detail is not None:
        body["detail"] = detail
    body.update(extra)
    return JSONResponse(
        status_code=status_code,
        content=body,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers,
    )


def _field_errors(exc: RequestValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        # drop the "body"/"query"/"path" source marker
        field = ".".join(loc[1:]) or (loc[0] if loc else "request")
        errors.setdefault(field, error.get("msg", "invalid value"))
    return errors


def register_error_handlers(app: FastAPI) -> None:
    """Register the problem-detail exception handlers on a service application."""

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
        logger.warning(f"Conflict on {request.method} {request.url.path}: {exc.code}")
        return problem_response(
            status.HTTP_409_CONFLICT,
            "Conflict",
            exc.detail,
            type_="about:blank#" + exc.code.replace("_", "-"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return problem_response(
            status.HTTP_400_BAD_REQUEST,
            "Validation Failed",
            errors=_field_errors(exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return problem_response(
            exc.status_code,
            _title_for(exc.status_code),
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )


def _title_for(status_code: int) -> str:
    titles = {
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        409: "Conflict",
        502: "Bad Gateway",
        504: "Gateway Timeout",
    }
    return titles.get(status_code, "Error")
