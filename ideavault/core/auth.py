"""Authentication dependencies for FastAPI.

Sessions are issued by Clerk; the backend only verifies the session JWT
with the instance's PEM public key and reads the user id from ``sub``.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ideavault.core.config import get_settings
from ideavault.core.logging import get_logger

logger = get_logger(__name__)

# HTTP Bearer scheme for Authorization header
security = HTTPBearer(auto_error=False)

CLERK_ALGORITHMS = ["RS256"]


class AuthContext:
    """Context object containing authenticated user info."""

    def __init__(self, user_id: str, token: str, claims: Optional[dict] = None):
        self.user_id = user_id
        self.token = token
        self.claims = claims or {}


def _authorized_parties() -> list[str]:
    raw = get_settings().CLERK_AUTHORIZED_PARTIES
    return [p.strip() for p in raw.split(",") if p.strip()]


def verify_session_token(token: str) -> dict:
    """
    Verify a Clerk session token and return its claims.

    Raises:
        JWTError: If the signature, expiry or authorized party check fails
    """
    key = get_settings().CLERK_JWT_KEY
    if not key:
        raise JWTError("CLERK_JWT_KEY not configured")

    claims = jwt.decode(
        token,
        key,
        algorithms=CLERK_ALGORITHMS,
        options={"verify_aud": False},
    )

    parties = _authorized_parties()
    if parties and claims.get("azp") and claims["azp"] not in parties:
        raise JWTError(f"Unauthorized party: {claims['azp']}")
    if not claims.get("sub"):
        raise JWTError("Token has no subject")
    return claims


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthContext]:
    """
    Extract and validate the current user from the request.

    Returns None if no valid auth is present (for optional auth endpoints).
    """
    if not credentials:
        return None

    token = credentials.credentials
    try:
        claims = verify_session_token(token)
    except JWTError as e:
        logger.warning(f"Auth error: {e}")
        return None

    return AuthContext(user_id=claims["sub"], token=token, claims=claims)


async def require_user(
    auth: Optional[AuthContext] = Depends(get_current_user),
) -> AuthContext:
    """Require authentication. Raises 401 if not authenticated."""
    if not auth:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth


# Alias used by routes where a user is optional (system logs)
optional_user = get_current_user
