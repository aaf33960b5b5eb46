import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select, func, update as sql_update

from catalog_api.core.exceptions import ConflictError, NotFoundError
from catalog_api.core.ids import parse_id
from catalog_api.models.category import Category
from catalog_api.models.navbar_category import NavbarCategory
from catalog_api.models.product import Product
from catalog_api.models.subcategory import SubCategory
from catalog_api.schemas.category import CategoryCreate, CategoryUpdate
from catalog_api.services.base import CatalogServiceBase
from catalog_api.services.navbar_category_service import NavbarCategoryService


logger = logging.getLogger(__name__)


class CategoryService(CatalogServiceBase):
    """Categories. Names and slugs are unique per navbar category."""

    entity_label = "category"

    async def list(
        self,
        navbar_category_id: Optional[uuid.UUID] = None,
        include_inactive: bool = False
    ) -> List[Category]:
        """
        List categories ordered by display order, newest first within one order.

        Public listings (include_inactive=False) also hide categories whose
        navbar category is inactive.
        """
        stmt = select(Category).order_by(Category.order, Category.created_at.desc())

        if navbar_category_id:
            stmt = stmt.where(Category.navbar_category_id == navbar_category_id)

        if not include_inactive:
            stmt = (
                stmt.join(NavbarCategory, Category.navbar_category_id == NavbarCategory.id)
                .where(Category.is_active == True)
                .where(NavbarCategory.is_active == True)
            )

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_by_parent(
        self,
        navbar_category_id: uuid.UUID,
        include_inactive: bool = False
    ) -> List[Category]:
        return await self.list(navbar_category_id=navbar_category_id, include_inactive=include_inactive)

    async def list_by_navbar_slug(
        self,
        navbar_slug: str
    ) -> Tuple[Optional[NavbarCategory], List[Category]]:
        """Active categories of an active navbar category (empty if none matches)."""
        navbar_category = await NavbarCategoryService(self.db).get_by_slug(
            navbar_slug, active_only=True
        )
        if not navbar_category:
            return None, []
        return navbar_category, await self.list_by_parent(navbar_category.id)

    async def get_by_id(
        self,
        category_id: uuid.UUID,
        refresh: bool = False
    ) -> Optional[Category]:
        stmt = select(Category).where(Category.id == category_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, category_id: uuid.UUID, message: str = "Category not found") -> Category:
        category = await self.get_by_id(category_id)
        if not category:
            raise NotFoundError(message)
        return category

    async def get_by_slug(
        self,
        slug: str,
        navbar_category_id: Optional[uuid.UUID] = None,
        active_only: bool = True
    ) -> Optional[Category]:
        """
        Find a category by slug.

        Slugs repeat across navbar categories; without a navbar scope the
        earliest created match wins.
        """
        stmt = select(Category).where(Category.slug == slug)
        if navbar_category_id:
            stmt = stmt.where(Category.navbar_category_id == navbar_category_id)
        if active_only:
            stmt = stmt.where(Category.is_active == True)
        stmt = stmt.order_by(Category.created_at).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slugs(
        self,
        slug: str,
        navbar_slug: Optional[str] = None
    ) -> Optional[Category]:
        """Active category by slug, optionally inside the navbar category with navbar_slug."""
        navbar_category_id = None
        if navbar_slug:
            navbar_category = await NavbarCategoryService(self.db).get_by_slug(
                navbar_slug, active_only=True
            )
            if not navbar_category:
                return None
            navbar_category_id = navbar_category.id
        return await self.get_by_slug(slug, navbar_category_id=navbar_category_id)

    async def name_exists(
        self,
        name: str,
        navbar_category_id: uuid.UUID,
        exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        stmt = select(Category.id).where(
            Category.navbar_category_id == navbar_category_id,
            func.lower(Category.name) == name.lower(),
        )
        if exclude_id:
            stmt = stmt.where(Category.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.first() is not None

    async def create(self, data: CategoryCreate) -> Category:
        name = self.require(data.name, "Category name is required")
        navbar_category_id = parse_id(
            self.require(data.navbar_category, "Navbar category is required"),
            "navbar category ID",
        )

        await NavbarCategoryService(self.db).get_or_404(navbar_category_id)

        if await self.name_exists(name, navbar_category_id):
            raise ConflictError("Category with this name already exists in this navbar category")

        slug = self.make_slug(name)
        category = Category(
            navbar_category_id=navbar_category_id,
            name=name,
            slug=slug,
            description=data.description or "",
            image=data.image or "",
            order=data.order if data.order is not None else 0,
            is_active=data.is_active if data.is_active is not None else True,
        )
        self.db.add(category)
        await self.commit_unique(slug)

        logger.info("Created category '%s' (%s)", name, category.id)
        return await self.get_by_id(category.id, refresh=True)

    async def update(self, category_id: uuid.UUID, data: CategoryUpdate) -> Category:
        """
        Partial update.

        Moving a category to another navbar category rewrites the
        denormalised navbar category of all its products in the same commit.
        """
        category = await self.get_or_404(category_id)
        changes = data.model_dump(exclude_unset=True)

        navbar_category_id = category.navbar_category_id
        if changes.get("navbar_category"):
            navbar_category_id = parse_id(changes["navbar_category"], "navbar category ID")
            if navbar_category_id != category.navbar_category_id:
                await NavbarCategoryService(self.db).get_or_404(navbar_category_id)
        moved = navbar_category_id != category.navbar_category_id

        name = category.name
        if "name" in changes:
            name = self.require(changes["name"], "Category name is required")
        renamed = name != category.name

        if renamed or moved:
            if await self.name_exists(name, navbar_category_id, exclude_id=category.id):
                raise ConflictError("Category with this name already exists in this navbar category")

        if renamed:
            category.name = name
            category.slug = self.make_slug(name)

        if moved:
            category.navbar_category_id = navbar_category_id
            await self.db.execute(
                sql_update(Product)
                .where(Product.category_id == category.id)
                .values(navbar_category_id=navbar_category_id)
            )

        if "description" in changes:
            category.description = changes["description"] or ""
        if "image" in changes:
            category.image = changes["image"] or ""
        if changes.get("order") is not None:
            category.order = changes["order"]
        if changes.get("is_active") is not None:
            category.is_active = changes["is_active"]

        await self.commit_unique(category.slug)

        logger.info("Updated category %s", category.id)
        return await self.get_by_id(category.id, refresh=True)

    async def delete(self, category_id: uuid.UUID) -> Category:
        """Hard delete. Refused while sub-categories or products still point at it."""
        category = await self.get_or_404(category_id)

        subcategories = await self.db.execute(
            select(func.count(SubCategory.id)).where(SubCategory.category_id == category.id)
        )
        products = await self.db.execute(
            select(func.count(Product.id)).where(Product.category_id == category.id)
        )
        if subcategories.scalar() or products.scalar():
            raise ConflictError("Cannot delete category that still has sub-categories or products")

        await self.db.delete(category)
        await self.db.commit()

        logger.info("Deleted category %s", category.id)
        return category
