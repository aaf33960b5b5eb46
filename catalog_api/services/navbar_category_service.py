import logging
import uuid
from typing import List, Optional

from sqlalchemy import select, func

from catalog_api.core.exceptions import ConflictError, NotFoundError
from catalog_api.models.category import Category
from catalog_api.models.navbar_category import NavbarCategory
from catalog_api.schemas.navbar_category import NavbarCategoryCreate, NavbarCategoryUpdate
from catalog_api.services.base import CatalogServiceBase


logger = logging.getLogger(__name__)


class NavbarCategoryService(CatalogServiceBase):
    """Top-level menu entries. Names and slugs are globally unique."""

    entity_label = "navbar category"

    async def list(self, include_inactive: bool = False) -> List[NavbarCategory]:
        stmt = select(NavbarCategory).order_by(
            NavbarCategory.order, NavbarCategory.created_at.desc()
        )
        if not include_inactive:
            stmt = stmt.where(NavbarCategory.is_active == True)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(
        self,
        navbar_category_id: uuid.UUID,
        refresh: bool = False
    ) -> Optional[NavbarCategory]:
        stmt = select(NavbarCategory).where(NavbarCategory.id == navbar_category_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, navbar_category_id: uuid.UUID) -> NavbarCategory:
        navbar_category = await self.get_by_id(navbar_category_id)
        if not navbar_category:
            raise NotFoundError("Navbar category not found")
        return navbar_category

    async def get_by_slug(
        self,
        slug: str,
        active_only: bool = False
    ) -> Optional[NavbarCategory]:
        stmt = select(NavbarCategory).where(NavbarCategory.slug == slug)
        if active_only:
            stmt = stmt.where(NavbarCategory.is_active == True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def name_exists(
        self,
        name: str,
        exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        """Case-insensitive name lookup."""
        stmt = select(NavbarCategory.id).where(
            func.lower(NavbarCategory.name) == name.lower()
        )
        if exclude_id:
            stmt = stmt.where(NavbarCategory.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.first() is not None

    async def create(self, data: NavbarCategoryCreate) -> NavbarCategory:
        name = self.require(data.name, "Name is required")

        if await self.name_exists(name):
            raise ConflictError("Category with this name already exists")

        slug = self.make_slug(name)
        navbar_category = NavbarCategory(
            name=name,
            slug=slug,
            description=data.description or "",
            order=data.order if data.order is not None else 0,
            is_active=data.is_active if data.is_active is not None else True,
        )
        self.db.add(navbar_category)
        await self.commit_unique(slug)

        logger.info("Created navbar category '%s' (%s)", name, navbar_category.id)
        return await self.get_by_id(navbar_category.id, refresh=True)

    async def update(
        self,
        navbar_category_id: uuid.UUID,
        data: NavbarCategoryUpdate
    ) -> NavbarCategory:
        navbar_category = await self.get_or_404(navbar_category_id)
        changes = data.model_dump(exclude_unset=True)

        if "name" in changes:
            name = self.require(changes["name"], "Name is required")
            if name != navbar_category.name:
                if await self.name_exists(name, exclude_id=navbar_category.id):
                    raise ConflictError("Category with this name already exists")
                navbar_category.name = name
                navbar_category.slug = self.make_slug(name)

        if "description" in changes:
            navbar_category.description = changes["description"] or ""
        if changes.get("order") is not None:
            navbar_category.order = changes["order"]
        if changes.get("is_active") is not None:
            navbar_category.is_active = changes["is_active"]

        await self.commit_unique(navbar_category.slug)

        logger.info("Updated navbar category %s", navbar_category.id)
        return await self.get_by_id(navbar_category.id, refresh=True)

    async def delete(self, navbar_category_id: uuid.UUID) -> NavbarCategory:
        """Hard delete. Refused while categories still point at it."""
        navbar_category = await self.get_or_404(navbar_category_id)

        children = await self.db.execute(
            select(func.count(Category.id)).where(
                Category.navbar_category_id == navbar_category.id
            )
        )
        if children.scalar():
            raise ConflictError("Cannot delete navbar category that still has categories")

        await self.db.delete(navbar_category)
        await self.db.commit()

        logger.info("Deleted navbar category %s", navbar_category.id)
        return navbar_category
