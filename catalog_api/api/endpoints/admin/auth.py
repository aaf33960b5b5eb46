import logging

from fastapi import APIRouter, Response

from catalog_api.api.deps import CurrentAdmin
from catalog_api.config import settings
from catalog_api.core.exceptions import AuthError, ValidationError
from catalog_api.schemas.auth import AdminUserResponse, LoginRequest, LoginResponse, LogoutResponse
from catalog_api.services.auth_service import AuthService


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin Authentication"])

COOKIE_SAMESITE = "strict"


def set_auth_cookie(response: Response, token: str):
    """Set the httpOnly admin session cookie."""
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=COOKIE_SAMESITE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )


def clear_auth_cookie(response: Response):
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, response: Response):
    """
    Log in to the admin dashboard.

    On success the session token is set as an httpOnly cookie; it can also
    be sent as a Bearer token by API clients.
    """
    if not data.username or not data.password:
        raise ValidationError("Username and password are required")

    auth_service = AuthService()
    user = auth_service.authenticate_admin(data.username, data.password)
    if user is None:
        logger.warning("Failed admin login for username '%s'", data.username)
        raise AuthError("Invalid credentials")

    set_auth_cookie(response, auth_service.create_session_token(user))
    logger.info("Admin '%s' logged in", user.username)

    return LoginResponse(user=AdminUserResponse(**user.to_dict()))


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response):
    """Clear the session cookie."""
    clear_auth_cookie(response)
    return LogoutResponse()


@router.get("/me", response_model=AdminUserResponse)
async def get_current_admin(admin: CurrentAdmin):
    """The admin the current session belongs to."""
    return AdminUserResponse(**admin.to_dict())
