import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.exceptions import ConflictError, ValidationError
from catalog_api.core.slugs import slugify


logger = logging.getLogger(__name__)


class CatalogServiceBase:
    """Shared write helpers for the catalog entity services."""

    # Used in slug conflict messages: 'A category with the slug "x" ...'
    entity_label: str = "record"

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def require(value: Optional[str], message: str) -> str:
        """Return the trimmed value, or raise 400 if it is missing or blank."""
        if value is None or not str(value).strip():
            raise ValidationError(message)
        return str(value).strip()

    def make_slug(self, name: str) -> str:
        slug = slugify(name)
        if not slug:
            raise ValidationError("Name must contain at least one letter or digit")
        return slug

    async def commit_unique(self, slug: str) -> None:
        """
        Commit pending changes.

        The unique indexes are the only guard against two concurrent writes
        producing the same slug or name in one scope. Such a violation becomes
        409 and nothing is auto-suffixed. Any other integrity failure (a
        parent deleted mid-write, a missing column value) propagates as 500.
        """
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            violation = str(exc.orig).lower()
            if not is_unique_violation(violation):
                logger.error("Integrity error saving %s '%s': %s", self.entity_label, slug, violation)
                raise
            if "slug" in violation:
                logger.info("Slug conflict for %s '%s'", self.entity_label, slug)
                raise ConflictError(
                    f'A {self.entity_label} with the slug "{slug}" already exists. '
                    f'Try a different name.'
                )
            logger.info("Name conflict for %s '%s'", self.entity_label, slug)
            raise ConflictError(f"A {self.entity_label} with this name already exists")


def is_unique_violation(message: str) -> bool:
    """True for a unique constraint error message from PostgreSQL or SQLite."""
    return "duplicate key" in message or "unique constraint" in message
