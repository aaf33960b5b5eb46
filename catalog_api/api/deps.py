from dataclasses import dataclass
from typing import Annotated, Optional
import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_api.config import settings
from catalog_api.core.exceptions import AuthError
from catalog_api.core.security import AdminUser, verify_access_token
from catalog_api.database import get_db, get_session_factory


logger = logging.getLogger(__name__)

NO_TOKEN_ERROR = "No authentication token found"
INVALID_TOKEN_ERROR = "Invalid or expired token"


@dataclass
class AuthResult:
    is_authenticated: bool
    user: Optional[AdminUser] = None
    error: Optional[str] = None


def get_request_token(request: Request) -> Optional[str]:
    """
    Find the session token on a request.

    Supports both:
    1. httpOnly cookie (what the admin dashboard uses)
    2. Bearer token in Authorization header (scripts, API clients)
    """
    # Priority 1: Check httpOnly cookie
    cookie_token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if cookie_token:
        return cookie_token

    # Priority 2: Fall back to Authorization header
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()

    return None


def verify_auth(request: Request) -> AuthResult:
    """Check the request's session token. Never raises."""
    token = get_request_token(request)
    if not token:
        return AuthResult(is_authenticated=False, error=NO_TOKEN_ERROR)

    payload = verify_access_token(token)
    if payload is None:
        return AuthResult(is_authenticated=False, error=INVALID_TOKEN_ERROR)

    user = AdminUser(
        username=payload["sub"],
        name=payload.get("name", payload["sub"]),
        role=payload.get("role", "admin"),
    )
    return AuthResult(is_authenticated=True, user=user)


async def require_admin(request: Request) -> AdminUser:
    """
    Dependency guarding every admin route.

    Attached once to the admin router, so no admin handler runs (and no
    store call happens) without a valid session.
    """
    result = verify_auth(request)
    if not result.is_authenticated:
        logger.warning(
            "Rejected admin request %s %s: %s",
            request.method, request.url.path, result.error,
        )
        raise AuthError(result.error or "Unauthorized")
    return result.user


# Type aliases for cleaner dependency injection
DB = Annotated[AsyncSession, Depends(get_db)]
SessionFactory = Annotated[async_sessionmaker, Depends(get_session_factory)]
CurrentAdmin = Annotated[AdminUser, Depends(require_admin)]
