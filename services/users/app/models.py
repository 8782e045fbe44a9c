"""
SQLAlchemy ORM models for the Users service.

Defines the database schema for user-related tables.
"""
from sqlalchemy import Column, Integer, String, Index, func
from .database import Base

class User(Base):
    """
    User model representing a user in the system.
    
    Attributes:
        id (int): Primary key, auto-incremented user ID
        name (str): User's full name
        email (str): User's email address, unique regardless of case
    """
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), unique=True, nullable=False)

    __table_args__ = (
        Index("ix_users_email_lower", func.lower(email), unique=True),
    )
