"""
Business rules for the Users service.

Email addresses are unique regardless of case. Both creation and update
check this before writing, and a race that slips past the check is caught
by the database's unique index and reported the same way.
"""
import logging
import math
from typing import Any, Dict, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from services.common.problems import ConflictError
from . import crud, models, schemas
from .database import get_db

logger = logging.getLogger(__name__)

EMAIL_ALREADY_EXISTS = "email_already_exists"
SORTABLE_FIELDS = ("id", "name", "email")


def _email_conflict() -> ConflictError:
    return ConflictError(EMAIL_ALREADY_EXISTS, "A user with this email already exists.")


class UserService:
    """Mediates between the user endpoints and the storage port."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self, page: int, size: int, sort_by: str = "id", descending: bool = False) -> schemas.UserPage:
        """
        Return one page of users.

        Raises:
            ValueError: if ``sort_by`` is not a sortable field
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by '{sort_by}'")
        users, total = crud.get_users(
            self.db, skip=page * size, limit=size, sort_by=sort_by, descending=descending
        )
        return schemas.UserPage(
            content=[schemas.User.model_validate(user) for user in users],
            page=page,
            size=size,
            total_elements=total,
            total_pages=math.ceil(total / size) if size else 0,
        )

    def find_by_id(self, user_id: int) -> Optional[models.User]:
        return crud.get_user(self.db, user_id)

    def find_by_name(self, name: str) -> Optional[models.User]:
        return crud.get_user_by_name(self.db, name)

    def create(self, request: schemas.UserRequest) -> models.User:
        """
        Create a user.

        Raises:
            ConflictError: if the email is already used by any user
        """
        if crud.email_exists(self.db, request.email):
            raise _email_conflict()
        try:
            user = crud.create_user(self.db, request.name, request.email)
        except IntegrityError:
            self.db.rollback()
            raise _email_conflict()
        logger.info(f"Created user id={user.id}")
        return user

    def update(self, user_id: int, changes: Dict[str, Any]) -> Optional[models.User]:
        """
        Apply the non-null fields of ``changes`` to a user.

        Returns:
            The updated user, or None if no user has ``user_id``

        Raises:
            ConflictError: if the new email belongs to a different user
        """
        user = crud.get_user(self.db, user_id)
        if user is None:
            return None

        changes = {key: value for key, value in changes.items() if value is not None}
        email = changes.get("email")
        if email is not None and crud.email_exists(self.db, email, exclude_id=user_id):
            raise _email_conflict()

        for key, value in changes.items():
            setattr(user, key, value)
        try:
            return crud.save_user(self.db, user)
        except IntegrityError:
            self.db.rollback()
            raise _email_conflict()

    def delete(self, user_id: int) -> bool:
        return crud.delete_user(self.db, user_id)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """FastAPI dependency building the service around the request's session."""
    return UserService(db)
