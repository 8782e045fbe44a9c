"""
Verification of OIDC ID tokens.

The gateway verifies the ID token it stores in a caller's session, and the
orders service verifies the same token when it arrives as a bearer
credential. Both read the issuer settings from the environment.
"""
import os
from typing import Any, Dict

from jose import jwt

OIDC_SECRET_KEY = os.getenv("OIDC_SECRET_KEY", "dev-oidc-secret-change-me")
OIDC_ALGORITHM = os.getenv("OIDC_ALGORITHM", "HS256")
OIDC_ISSUER = os.getenv("OIDC_ISSUER") or None
OIDC_AUDIENCE = os.getenv("OIDC_AUDIENCE") or None


def decode_id_token(token: str) -> Dict[str, Any]:
    """
    Verify an ID token's signature and standard claims.

    Args:
        token: Encoded JWT

    Returns:
        The token's claims

    Raises:
        jose.JWTError: if the signature, expiry, issuer or audience is invalid
    """
    return jwt.decode(
        token,
        OIDC_SECRET_KEY,
        algorithms=[OIDC_ALGORITHM],
        audience=OIDC_AUDIENCE,
        issuer=OIDC_ISSUER,
        options={"verify_aud": OIDC_AUDIENCE is not None},
    )
