"""
Pydantic schemas for request/response validation in the Users service.

These schemas define the structure of data for API requests and responses.
"""
from typing import Annotated, List, Optional
from pydantic import EmailStr, StringConstraints

from services.common.schemas import CamelModel

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Email = EmailStr

class UserRequest(CamelModel):
    """Schema for creating a user or replacing all of its fields."""
    name: Name
    email: Email

class UserUpdate(CamelModel):
    """Schema for a partial update. Omitted or null fields are left unchanged."""
    name: Optional[Name] = None
    email: Optional[Email] = None

class User(CamelModel):
    """
    Schema for user responses.
    
    Attributes:
        id (int): User's unique identifier
        name (str): User's full name
        email (str): User's email address
    """
    id: int
    name: str
    email: str

class UserPage(CamelModel):
    """One page of the user listing."""
    content: List[User]
    page: int
    size: int
    total_elements: int
    total_pages: int
