"""
Error taxonomy for the catalog API.

Services raise these; the handlers registered in main.py render every one of
them as ``{"error": message}`` with the matching HTTP status.
"""

from fastapi import status


class CatalogError(Exception):
    """Base error. Unexpected failures surface as 500."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Missing/empty required field, malformed id, broken cross-entity rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(CatalogError):
    """Missing, invalid or expired admin session."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(CatalogError):
    """Entity or referenced parent does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(CatalogError):
    """Duplicate name in scope, duplicate slug, or parent still has children."""

    status_code = status.HTTP_409_CONFLICT
