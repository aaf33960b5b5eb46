import logging
import secrets
from typing import Optional

from catalog_api.config import settings
from catalog_api.core.security import AdminUser, create_access_token, verify_password


logger = logging.getLogger(__name__)


class AuthService:
    """Authentication for the single configured back-office account."""

    def authenticate_admin(self, username: str, password: str) -> Optional[AdminUser]:
        """
        Check credentials against the configured admin account.

        ADMIN_PASSWORD_HASH (bcrypt) takes precedence over the plain
        ADMIN_PASSWORD setting. An empty configured password never matches.

        Returns:
            AdminUser if authentication successful, None otherwise
        """
        if not secrets.compare_digest(username.encode(), settings.ADMIN_USERNAME.encode()):
            return None

        if settings.ADMIN_PASSWORD_HASH:
            valid = verify_password(password, settings.ADMIN_PASSWORD_HASH)
        elif settings.ADMIN_PASSWORD:
            valid = secrets.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
        else:
            logger.error("Admin login attempted but no admin password is configured")
            valid = False

        if not valid:
            return None

        return AdminUser(
            username=settings.ADMIN_USERNAME,
            name=settings.ADMIN_NAME,
            role=settings.ADMIN_ROLE,
        )

    def create_session_token(self, user: AdminUser) -> str:
        return create_access_token(
            subject=user.username,
            additional_claims={"name": user.name, "role": user.role},
        )
