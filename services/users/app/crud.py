"""
CRUD (Create, Read, Update, Delete) operations for the Users service.

This module is the storage port for user rows. Name and email lookups are
case-insensitive.
"""
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from . import models

def get_user(db: Session, user_id: int) -> Optional[models.User]:
    """
    Retrieve a single user by ID.
    
    Args:
        db: Database session
        user_id: ID of the user to retrieve
        
    Returns:
        User object or None if not found
    """
    return db.query(models.User).filter(models.User.id == user_id).first()

def get_user_by_name(db: Session, name: str) -> Optional[models.User]:
    """
    Retrieve the first user whose name matches, ignoring case.
    
    Args:
        db: Database session
        name: Name to search for
        
    Returns:
        User object or None if not found
    """
    return (
        db.query(models.User)
        .filter(func.lower(models.User.name) == name.lower())
        .order_by(models.User.id)
        .first()
    )

def email_exists(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    """
    Check whether any user, other than ``exclude_id``, already uses an email.
    
    Args:
        db: Database session
        email: Email address to look for, compared case-insensitively
        exclude_id: Optional user ID to ignore
        
    Returns:
        True if another user has the email
    """
    query = db.query(models.User.id).filter(func.lower(models.User.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(models.User.id != exclude_id)
    return query.first() is not None

def get_users(
    db: Session,
    skip: int = 0,
    limit: int = 20,
    sort_by: str = "id",
    descending: bool = False,
) -> Tuple[List[models.User], int]:
    """
    Retrieve one page of users.
    
    Args:
        db: Database session
        skip: Number of records to skip (offset)
        limit: Maximum number of records to return
        sort_by: Column name to order by
        descending: Sort direction
        
    Returns:
        Tuple of (users on the page, total number of users)
    """
    column = getattr(models.User, sort_by)
    order = column.desc() if descending else column.asc()
    total = db.query(func.count(models.User.id)).scalar()
    users = db.query(models.User).order_by(order, models.User.id).offset(skip).limit(limit).all()
    return users, total

def create_user(db: Session, name: str, email: str) -> models.User:
    """
    Create a new user in the database.
    
    Raises:
        sqlalchemy.exc.IntegrityError: if the email is already taken
    """
    db_user = models.User(name=name, email=email)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def save_user(db: Session, db_user: models.User) -> models.User:
    """Persist changes made to an already loaded user."""
    db.commit()
    db.refresh(db_user)
    return db_user

def delete_user(db: Session, user_id: int) -> bool:
    """
    Delete a user from the database.
    
    Args:
        db: Database session
        user_id: ID of the user to delete
        
    Returns:
        True if user was deleted, False if not found
    """
    db_user = get_user(db, user_id)
    if db_user is None:
        return False
    
    db.delete(db_user)
    db.commit()
    return True
