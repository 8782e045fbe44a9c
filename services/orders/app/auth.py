"""
Authentication utilities for the Orders service.

The service is a resource server: every order endpoint requires the caller's
ID token as a bearer credential, which the API gateway relays on the
caller's behalf.
"""
import logging
from typing import Optional
from jose import JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from services.common.tokens import decode_id_token

logger = logging.getLogger(__name__)

# Security scheme for JWT bearer tokens
security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    """Current authenticated caller."""
    subject: str
    email: Optional[str] = None


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """
    FastAPI dependency to get the current caller from the bearer ID token.
    
    Args:
        credentials: HTTP Authorization credentials (injected)
        
    Returns:
        Current authenticated caller
        
    Raises:
        HTTPException: 401 if the token is missing, invalid or has no subject
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    
    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_id_token(credentials.credentials)
    except JWTError as e:
        logger.error(f"JWT validation error: {e}")
        raise credentials_exception

    subject = payload.get("sub")
    if subject is None:
        raise credentials_exception
    return CurrentUser(subject=str(subject), email=payload.get("email"))
