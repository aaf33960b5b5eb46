from typing import List, Optional

from catalog_api.schemas.base import BaseResponseSchema
from catalog_api.schemas.category import CategoryResponse
from catalog_api.schemas.navbar_category import NavbarCategoryResponse
from catalog_api.schemas.product import ProductResponse
from catalog_api.schemas.subcategory import SubCategoryResponse


class PageData(BaseResponseSchema):
    """
    A resolved public page.

    ``level`` says how deep the path went (navbar, category, subcategory,
    product). Sibling lists (``navbarCategories``, ``categories``,
    ``subcategories``) feed the navigation rails; ``products`` are the
    products listed on the page.
    """
    level: str
    navbar_category: NavbarCategoryResponse
    category: Optional[CategoryResponse] = None
    subcategory: Optional[SubCategoryResponse] = None
    product: Optional[ProductResponse] = None
    navbar_categories: List[NavbarCategoryResponse] = []
    categories: List[CategoryResponse] = []
    subcategories: List[SubCategoryResponse] = []
    products: List[ProductResponse] = []
    related_products: List[ProductResponse] = []
