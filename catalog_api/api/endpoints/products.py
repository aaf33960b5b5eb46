from typing import Optional

from fastapi import APIRouter, Query

from catalog_api.api.deps import DB
from catalog_api.core.exceptions import NotFoundError
from catalog_api.core.ids import parse_optional_id
from catalog_api.schemas.base import DataResponse, ListResponse
from catalog_api.schemas.category import CategoryRef
from catalog_api.schemas.product import ProductResponse
from catalog_api.schemas.subcategory import SubCategoryRef
from catalog_api.services.product_service import ProductService


router = APIRouter(tags=["Products"])


class ProductsByCategoryResponse(ListResponse[ProductResponse]):
    category: CategoryRef


class ProductsBySubCategoryResponse(ListResponse[ProductResponse]):
    subcategory: SubCategoryRef


def product_list(products) -> ListResponse[ProductResponse]:
    return ListResponse[ProductResponse](
        data=[ProductResponse.model_validate(p) for p in products],
        count=len(products),
    )


@router.get("", response_model=ListResponse[ProductResponse])
async def list_products(
    db: DB,
    navbar_category: Optional[str] = Query(None, alias="navbarCategory"),
    category: Optional[str] = Query(None),
    subcategory: Optional[str] = Query(None),
):
    """
    Active products, newest first.
    Filtering by category includes the products of its sub-categories.
    """
    products = await ProductService(db).list(
        navbar_category_id=parse_optional_id(navbar_category, "navbar category ID"),
        category_id=parse_optional_id(category, "category ID"),
        subcategory_id=parse_optional_id(subcategory, "subcategory ID"),
    )
    return product_list(products)


@router.get("/by-category/{slug}", response_model=ProductsByCategoryResponse)
async def list_products_by_category(
    slug: str,
    db: DB,
    navbar: Optional[str] = Query(None, description="Navbar category slug, when the category slug is ambiguous"),
):
    """Every active product of the category, including those filed under its sub-categories."""
    category, products = await ProductService(db).list_by_category_slug(slug, navbar_slug=navbar)
    return ProductsByCategoryResponse(
        data=[ProductResponse.model_validate(p) for p in products],
        count=len(products),
        category=CategoryRef.model_validate(category),
    )


@router.get("/by-subcategory/{slug}", response_model=ProductsBySubCategoryResponse)
async def list_products_by_subcategory(
    slug: str,
    db: DB,
    category: Optional[str] = Query(None, description="Category slug, when the sub-category slug is ambiguous"),
):
    subcategory, products = await ProductService(db).list_by_subcategory_slug(slug, category_slug=category)
    return ProductsBySubCategoryResponse(
        data=[ProductResponse.model_validate(p) for p in products],
        count=len(products),
        subcategory=SubCategoryRef.model_validate(subcategory),
    )


@router.get("/by-slug/{slug}", response_model=DataResponse[ProductResponse])
async def get_product_by_slug(slug: str, db: DB):
    product = await ProductService(db).get_by_slug(slug)
    if not product:
        raise NotFoundError("Product not found")
    return DataResponse[ProductResponse](data=ProductResponse.model_validate(product))
