import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select, func, update as sql_update

from catalog_api.core.exceptions import ConflictError, NotFoundError
from catalog_api.core.ids import parse_id
from catalog_api.models.category import Category
from catalog_api.models.product import Product
from catalog_api.models.subcategory import SubCategory
from catalog_api.schemas.subcategory import SubCategoryCreate, SubCategoryUpdate
from catalog_api.services.base import CatalogServiceBase
from catalog_api.services.category_service import CategoryService


logger = logging.getLogger(__name__)


class SubCategoryService(CatalogServiceBase):
    """Sub-categories. Names and slugs are unique per category."""

    entity_label = "sub-category"

    async def list(
        self,
        category_id: Optional[uuid.UUID] = None,
        include_inactive: bool = False
    ) -> List[SubCategory]:
        stmt = select(SubCategory).order_by(SubCategory.order, SubCategory.created_at.desc())
        if category_id:
            stmt = stmt.where(SubCategory.category_id == category_id)
        if not include_inactive:
            stmt = (
                stmt.join(Category, SubCategory.category_id == Category.id)
                .where(SubCategory.is_active == True)
                .where(Category.is_active == True)
            )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_by_parent(
        self,
        category_id: uuid.UUID,
        include_inactive: bool = False
    ) -> List[SubCategory]:
        return await self.list(category_id=category_id, include_inactive=include_inactive)

    async def list_by_category_slug(
        self,
        category_slug: str,
        navbar_slug: Optional[str] = None
    ) -> Tuple[Category, List[SubCategory]]:
        """The active category with this slug and its active sub-categories."""
        category = await CategoryService(self.db).get_by_slugs(category_slug, navbar_slug)
        if not category:
            raise NotFoundError("Category not found")
        return category, await self.list_by_parent(category.id)

    async def get_by_id(
        self,
        subcategory_id: uuid.UUID,
        refresh: bool = False
    ) -> Optional[SubCategory]:
        stmt = select(SubCategory).where(SubCategory.id == subcategory_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(
        self,
        subcategory_id: uuid.UUID,
        message: str = "Sub-category not found"
    ) -> SubCategory:
        subcategory = await self.get_by_id(subcategory_id)
        if not subcategory:
            raise NotFoundError(message)
        return subcategory

    async def get_by_slug(
        self,
        slug: str,
        category_id: Optional[uuid.UUID] = None,
        active_only: bool = True
    ) -> Optional[SubCategory]:
        """Find a sub-category by slug; without a category scope the earliest created wins."""
        stmt = select(SubCategory).where(SubCategory.slug == slug)
        if category_id:
            stmt = stmt.where(SubCategory.category_id == category_id)
        if active_only:
            stmt = stmt.where(SubCategory.is_active == True)
        stmt = stmt.order_by(SubCategory.created_at).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def name_exists(
        self,
        name: str,
        category_id: uuid.UUID,
        exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        stmt = select(SubCategory.id).where(
            SubCategory.category_id == category_id,
            func.lower(SubCategory.name) == name.lower(),
        )
        if exclude_id:
            stmt = stmt.where(SubCategory.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.first() is not None

    async def create(self, data: SubCategoryCreate) -> SubCategory:
        name = self.require(data.name, "Sub-category name is required")
        category_id = parse_id(
            self.require(data.category, "Parent category is required"),
            "category ID",
        )

        await CategoryService(self.db).get_or_404(category_id, "Parent category not found")

        if await self.name_exists(name, category_id):
            raise ConflictError("Sub-category with this name already exists in this category")

        slug = self.make_slug(name)
        subcategory = SubCategory(
            category_id=category_id,
            name=name,
            slug=slug,
            description=data.description or "",
            image=data.image or "",
            order=data.order if data.order is not None else 0,
            is_active=data.is_active if data.is_active is not None else True,
        )
        self.db.add(subcategory)
        await self.commit_unique(slug)

        logger.info("Created sub-category '%s' (%s)", name, subcategory.id)
        return await self.get_by_id(subcategory.id, refresh=True)

    async def update(self, subcategory_id: uuid.UUID, data: SubCategoryUpdate) -> SubCategory:
        """
        Partial update.

        Moving a sub-category to another category carries its products along
        (category and navbar category rewritten) so they keep belonging to
        the category of their sub-category.
        """
        subcategory = await self.get_or_404(subcategory_id)
        changes = data.model_dump(exclude_unset=True)

        category_id = subcategory.category_id
        new_parent = None
        if changes.get("category"):
            category_id = parse_id(changes["category"], "category ID")
            if category_id != subcategory.category_id:
                new_parent = await CategoryService(self.db).get_or_404(
                    category_id, "Parent category not found"
                )

        name = subcategory.name
        if "name" in changes:
            name = self.require(changes["name"], "Sub-category name is required")
        renamed = name != subcategory.name

        if renamed or new_parent:
            if await self.name_exists(name, category_id, exclude_id=subcategory.id):
                raise ConflictError("Sub-category with this name already exists in this category")

        if renamed:
            subcategory.name = name
            subcategory.slug = self.make_slug(name)

        if new_parent:
            subcategory.category_id = new_parent.id
            await self.db.execute(
                sql_update(Product)
                .where(Product.subcategory_id == subcategory.id)
                .values(
                    category_id=new_parent.id,
                    navbar_category_id=new_parent.navbar_category_id,
                )
            )

        if "description" in changes:
            subcategory.description = changes["description"] or ""
        if "image" in changes:
            subcategory.image = changes["image"] or ""
        if changes.get("order") is not None:
            subcategory.order = changes["order"]
        if changes.get("is_active") is not None:
            subcategory.is_active = changes["is_active"]

        await self.commit_unique(subcategory.slug)

        logger.info("Updated sub-category %s", subcategory.id)
        return await self.get_by_id(subcategory.id, refresh=True)

    async def delete(self, subcategory_id: uuid.UUID) -> SubCategory:
        """Hard delete. Refused while products still point at it."""
        subcategory = await self.get_or_404(subcategory_id)

        products = await self.db.execute(
            select(func.count(Product.id)).where(Product.subcategory_id == subcategory.id)
        )
        if products.scalar():
            raise ConflictError("Cannot delete sub-category that still has products")

        await self.db.delete(subcategory)
        await self.db.commit()

        logger.info("Deleted sub-category %s", subcategory.id)
        return subcategory
