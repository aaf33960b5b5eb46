"""
Page resolution for the public site.

Turns a URL of up to four slugs (navbar / category / sub-category / product)
into the entities the page renders. Each level picks its match out of the
parent's full sibling list, so the "related" rails come with no extra query;
the independent child lists of the resolved node are fetched concurrently,
each on its own session.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_api.core.exceptions import ValidationError
from catalog_api.models import Category, NavbarCategory, Product, SubCategory
from catalog_api.services.category_service import CategoryService
from catalog_api.services.navbar_category_service import NavbarCategoryService
from catalog_api.services.product_service import ProductService
from catalog_api.services.subcategory_service import SubCategoryService


logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_DEPTH = 4
RELATED_PRODUCTS = 3


@dataclass
class PageResolution:
    """Outcome of resolving a slug path. `error` is set when a level did not match."""
    level: str = "navbar"
    error: Optional[str] = None
    navbar_category: Optional[NavbarCategory] = None
    category: Optional[Category] = None
    subcategory: Optional[SubCategory] = None
    product: Optional[Product] = None
    navbar_categories: List[NavbarCategory] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    subcategories: List[SubCategory] = field(default_factory=list)
    products: List[Product] = field(default_factory=list)
    related_products: List[Product] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.error is None


def pick(items: List[Any], slug: str) -> Optional[Any]:
    return next((item for item in items if item.slug == slug), None)


class PageResolutionService:
    """Resolves public page URLs against the active catalog."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def _read(self, query: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """Run one read on a session of its own (safe to gather)."""
        async with self.session_factory() as session:
            return await query(session)

    async def resolve(self, slugs: List[str]) -> PageResolution:
        if not 1 <= len(slugs) <= MAX_DEPTH:
            raise ValidationError(f"A page path has between 1 and {MAX_DEPTH} segments")

        navbar_slug, *rest = slugs
        page = PageResolution()

        # Level 1: navbar category, picked from all active navbar categories
        page.navbar_categories = await self._read(lambda s: NavbarCategoryService(s).list())
        page.navbar_category = pick(page.navbar_categories, navbar_slug)
        if not page.navbar_category:
            return self._miss(page, "Navbar category not found", slugs)

        page.categories = await self._read(
            lambda s: CategoryService(s).list_by_parent(page.navbar_category.id)
        )
        if not rest:
            return page

        # Level 2: category, picked from its navbar's categories
        category_slug, *rest = rest
        page.level = "category"
        page.category = pick(page.categories, category_slug)
        if not page.category:
            return self._miss(page, "Category not found", slugs)

        category_id = page.category.id
        page.subcategories, page.products = await asyncio.gather(
            self._read(lambda s: SubCategoryService(s).list_by_parent(category_id)),
            self._read(lambda s: ProductService(s).list_by_parent(category_id)),
        )
        if not rest:
            return page

        # Level 3: sub-category, picked from the category's sub-categories
        subcategory_slug, *rest = rest
        page.level = "subcategory"
        page.subcategory = pick(page.subcategories, subcategory_slug)
        if not page.subcategory:
            return self._miss(page, "Sub-category not found", slugs)

        page.products = [p for p in page.products if p.subcategory_id == page.subcategory.id]
        if not rest:
            return page

        # Level 4: product, picked from the sub-category's products
        page.level = "product"
        page.product = pick(page.products, rest[0])
        if not page.product:
            return self._miss(page, "Product not found", slugs)

        page.related_products = [
            p for p in page.products if p.id != page.product.id
        ][:RELATED_PRODUCTS]
        return page

    @staticmethod
    def _miss(page: PageResolution, message: str, slugs: List[str]) -> PageResolution:
        logger.info("Page /%s not resolved: %s", "/".join(slugs), message)
        page.error = message
        return page
