"""
Users Service FastAPI Application.

This module implements a users microservice using FastAPI with full CRUD operations.
It provides endpoints for creating, reading, updating, and deleting user data,
with relational database persistence.

The service is designed to be part of a microservices architecture and includes:
- CRUD endpoints for user management under /api/users
- Case-insensitive lookup by name
- A health check endpoint for service monitoring and orchestration

Attributes:
    app (FastAPI): The FastAPI application instance configured with the title "users-service".
"""
import logging
from fastapi import FastAPI, Depends, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware

from services.common.logging_config import configure_logging
from services.common.problems import register_error_handlers
from services.common.schemas import MAX_INT, RowId
from . import models, schemas
from .config import CORS_ORIGINS, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .database import engine
from .service import UserService, get_user_service

configure_logging()
logger = logging.getLogger(__name__)

# Create database tables
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="users-service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)


def _parse_sort(sort: str):
    parts = [part.strip() for part in sort.split(",")]
    descending = len(parts) > 1 and parts[1].lower() == "desc"
    return parts[0], descending


@app.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the users service.

    Returns:
        dict: {"status": "healthy"} while the service is operational.
    """
    return {"status": "healthy"}

@app.get("/api/users", response_model=schemas.UserPage)
def list_users(
    page: int = Query(0, ge=0, le=MAX_INT),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort: str = "id,asc",
    service: UserService = Depends(get_user_service)
):
    """
    List users one page at a time.

    Args:
        page: Zero-based page index (default: 0)
        size: Page size (default: 20)
        sort: "<field>,<asc|desc>" where field is id, name or email (default: "id,asc")

    Returns:
        Page object with the users and paging totals

    Raises:
        HTTPException: 400 if the sort field is not supported
    """
    logger.info(f"Received request to get all users page={page}, size={size}, sort={sort}")
    sort_by, descending = _parse_sort(sort)
    try:
        return service.find_all(page, size, sort_by=sort_by, descending=descending)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.get("/api/users/by-name/{name}", response_model=schemas.User)
def get_user_by_name(name: str, service: UserService = Depends(get_user_service)):
    """
    Get a user by name, ignoring case.

    Raises:
        HTTPException: 404 if no user has the name
    """
    db_user = service.find_by_name(name)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user

@app.get("/api/users/{user_id}", response_model=schemas.User)
def get_user(user_id: RowId, service: UserService = Depends(get_user_service)):
    """
    Get a single user by ID.

    Raises:
        HTTPException: 404 if user not found
    """
    db_user = service.find_by_id(user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user

@app.post("/api/users", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user(user: schemas.UserRequest, service: UserService = Depends(get_user_service)):
    """
    Create a new user.

    Raises:
        400 if name or email is missing or malformed
        409 if the email is already registered, in any letter case
    """
    return service.create(user)

@app.put("/api/users/{user_id}", response_model=schemas.User)
def replace_user(
    user_id: RowId,
    user: schemas.UserRequest,
    service: UserService = Depends(get_user_service)
):
    """
    Replace both fields of an existing user.

    Raises:
        HTTPException: 404 if user not found
        409 if the email belongs to another user
    """
    db_user = service.update(user_id, user.model_dump())
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user

@app.patch("/api/users/{user_id}", response_model=schemas.User)
def update_user(
    user_id: RowId,
    user: schemas.UserUpdate,
    service: UserService = Depends(get_user_service)
):
    """
    Update only the fields present in the request body.

    Raises:
        HTTPException: 404 if user not found
        409 if the email belongs to another user
    """
    db_user = service.update(user_id, user.model_dump(exclude_unset=True))
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user

@app.delete("/api/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: RowId, service: UserService = Depends(get_user_service)):
    """
    Delete a user.

    Raises:
        HTTPException: 404 if user not found
    """
    if not service.delete(user_id):
        raise HTTPException(status_code=404, detail="User not found")
