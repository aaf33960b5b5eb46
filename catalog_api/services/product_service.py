import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select, func

from catalog_api.core.exceptions import ConflictError, NotFoundError, ValidationError
from catalog_api.core.ids import parse_id, parse_optional_id
from catalog_api.models.category import Category
from catalog_api.models.product import Product
from catalog_api.models.subcategory import SubCategory
from catalog_api.schemas.product import ProductCreate, ProductUpdate
from catalog_api.services.base import CatalogServiceBase
from catalog_api.services.category_service import CategoryService
from catalog_api.services.subcategory_service import SubCategoryService


logger = logging.getLogger(__name__)


class ProductService(CatalogServiceBase):
    """
    Service for managing catalog products.

    A product always belongs to a category and optionally to one of that
    category's sub-categories. Its navbar category is copied from the
    category on every write.
    """

    entity_label = "product"

    async def list(
        self,
        navbar_category_id: Optional[uuid.UUID] = None,
        category_id: Optional[uuid.UUID] = None,
        subcategory_id: Optional[uuid.UUID] = None,
        include_inactive: bool = False
    ) -> List[Product]:
        """Products newest first. Filtering by category includes sub-category products."""
        stmt = select(Product).order_by(Product.created_at.desc())

        if navbar_category_id:
            stmt = stmt.where(Product.navbar_category_id == navbar_category_id)
        if category_id:
            stmt = stmt.where(Product.category_id == category_id)
        if subcategory_id:
            stmt = stmt.where(Product.subcategory_id == subcategory_id)
        if not include_inactive:
            stmt = stmt.where(Product.is_active == True)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_by_parent(
        self,
        category_id: uuid.UUID,
        subcategory_id: Optional[uuid.UUID] = None,
        include_inactive: bool = False
    ) -> List[Product]:
        return await self.list(
            category_id=category_id,
            subcategory_id=subcategory_id,
            include_inactive=include_inactive,
        )

    async def list_by_category_slug(
        self,
        category_slug: str,
        navbar_slug: Optional[str] = None
    ) -> Tuple[Category, List[Product]]:
        """The active category and all its active products, sub-category products included."""
        category = await CategoryService(self.db).get_by_slugs(category_slug, navbar_slug)
        if not category:
            raise NotFoundError("Category not found")
        return category, await self.list_by_parent(category.id)

    async def list_by_subcategory_slug(
        self,
        subcategory_slug: str,
        category_slug: Optional[str] = None
    ) -> Tuple[SubCategory, List[Product]]:
        category_id = None
        if category_slug:
            category = await CategoryService(self.db).get_by_slug(category_slug)
            if not category:
                raise NotFoundError("Category not found")
            category_id = category.id

        subcategory = await SubCategoryService(self.db).get_by_slug(
            subcategory_slug, category_id=category_id
        )
        if not subcategory:
            raise NotFoundError("Subcategory not found")
        return subcategory, await self.list(subcategory_id=subcategory.id)

    async def get_by_id(
        self,
        product_id: uuid.UUID,
        refresh: bool = False
    ) -> Optional[Product]:
        stmt = select(Product).where(Product.id == product_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, product_id: uuid.UUID) -> Product:
        product = await self.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    async def get_by_slug(
        self,
        slug: str,
        scope_id: Optional[uuid.UUID] = None,
        active_only: bool = True
    ) -> Optional[Product]:
        """
        Find a product by slug.

        scope_id is the sub-category id, or the category id for products
        without one. Without a scope the earliest created match wins.
        """
        stmt = select(Product).where(Product.slug == slug)
        if scope_id:
            stmt = stmt.where(Product.slug_scope_id == scope_id)
        if active_only:
            stmt = stmt.where(Product.is_active == True)
        stmt = stmt.order_by(Product.created_at).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def name_exists(
        self,
        name: str,
        category_id: uuid.UUID,
        subcategory_id: Optional[uuid.UUID],
        exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        """Case-insensitive name lookup within one category + sub-category scope."""
        stmt = select(Product.id).where(
            Product.category_id == category_id,
            func.lower(Product.name) == name.lower(),
        )
        if subcategory_id:
            stmt = stmt.where(Product.subcategory_id == subcategory_id)
        else:
            stmt = stmt.where(Product.subcategory_id.is_(None))
        if exclude_id:
            stmt = stmt.where(Product.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.first() is not None

    async def _resolve_subcategory(
        self,
        subcategory_id: Optional[uuid.UUID],
        category: Category
    ) -> Optional[SubCategory]:
        """Load the sub-category and check it belongs to the product's category."""
        if subcategory_id is None:
            return None
        subcategory = await SubCategoryService(self.db).get_or_404(
            subcategory_id, "Subcategory not found"
        )
        if subcategory.category_id != category.id:
            raise ValidationError("Subcategory does not belong to the selected category")
        return subcategory

    @staticmethod
    def _check_navbar_category(value: Optional[str], category: Category) -> None:
        """A supplied navbar category must be the category's own."""
        if not value:
            return
        navbar_category_id = parse_id(value, "navbar category ID")
        if navbar_category_id != category.navbar_category_id:
            raise ValidationError("Category does not belong to the selected navbar category")

    async def create(self, data: ProductCreate) -> Product:
        name = self.require(data.name, "Product name is required")
        description = self.require(data.description, "Product description is required")
        image1 = self.require(data.image1, "At least one product image is required")
        category_id = parse_id(self.require(data.category, "Category is required"), "category ID")

        category = await CategoryService(self.db).get_or_404(category_id)
        self._check_navbar_category(data.navbar_category, category)
        subcategory = await self._resolve_subcategory(
            parse_optional_id(data.subcategory, "subcategory ID"), category
        )
        subcategory_id = subcategory.id if subcategory else None

        if await self.name_exists(name, category.id, subcategory_id):
            raise ConflictError("Product with this name already exists in this category")

        slug = self.make_slug(name)
        product = Product(
            name=name,
            slug=slug,
            description=description,
            key_features=data.key_features or [],
            image1=image1,
            image2=data.image2 or "",
            image3=data.image3 or "",
            image4=data.image4 or "",
            navbar_category_id=category.navbar_category_id,
            category_id=category.id,
            subcategory_id=subcategory_id,
            slug_scope_id=subcategory_id or category.id,
            is_active=data.is_active if data.is_active is not None else True,
        )
        self.db.add(product)
        await self.commit_unique(slug)

        logger.info("Created product '%s' (%s)", name, product.id)
        return await self.get_by_id(product.id, refresh=True)

    async def update(self, product_id: uuid.UUID, data: ProductUpdate) -> Product:
        """
        Partial update.

        The sub-category rule is re-checked whenever category or
        sub-category change; ``subcategory: ""`` detaches the sub-category.
        """
        product = await self.get_or_404(product_id)
        changes = data.model_dump(exclude_unset=True)

        category = product.category
        if changes.get("category"):
            category_id = parse_id(changes["category"], "category ID")
            if category_id != product.category_id:
                category = await CategoryService(self.db).get_or_404(category_id)
        self._check_navbar_category(changes.get("navbar_category"), category)

        subcategory_id = product.subcategory_id
        if "subcategory" in changes:
            subcategory_id = parse_optional_id(changes["subcategory"], "subcategory ID")

        scope_changed = (
            category.id != product.category_id or subcategory_id != product.subcategory_id
        )
        if scope_changed:
            await self._resolve_subcategory(subcategory_id, category)

        name = product.name
        if "name" in changes:
            name = self.require(changes["name"], "Product name is required")
        renamed = name != product.name

        if renamed or scope_changed:
            if await self.name_exists(name, category.id, subcategory_id, exclude_id=product.id):
                raise ConflictError("Product with this name already exists in this category")

        if renamed:
            product.name = name
            product.slug = self.make_slug(name)

        if scope_changed:
            product.category_id = category.id
            product.subcategory_id = subcategory_id
            product.slug_scope_id = subcategory_id or category.id
        product.navbar_category_id = category.navbar_category_id

        if "description" in changes:
            product.description = self.require(
                changes["description"], "Product description is required"
            )
        if "image1" in changes:
            product.image1 = self.require(changes["image1"], "At least one product image is required")
        for field in ("image2", "image3", "image4"):
            if field in changes:
                setattr(product, field, changes[field] or "")
        if "key_features" in changes:
            product.key_features = changes["key_features"] or []
        if changes.get("is_active") is not None:
            product.is_active = changes["is_active"]

        await self.commit_unique(product.slug)

        logger.info("Updated product %s", product.id)
        return await self.get_by_id(product.id, refresh=True)

    async def delete(self, product_id: uuid.UUID) -> Product:
        product = await self.get_or_404(product_id)

        await self.db.delete(product)
        await self.db.commit()

        logger.info("Deleted product %s", product.id)
        return product
