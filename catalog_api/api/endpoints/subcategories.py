from typing import Optional

from fastapi import APIRouter, Query

from catalog_api.api.deps import DB
from catalog_api.core.ids import parse_optional_id
from catalog_api.schemas.base import ListResponse
from catalog_api.schemas.category import CategoryRef
from catalog_api.schemas.subcategory import SubCategoryResponse
from catalog_api.services.subcategory_service import SubCategoryService


router = APIRouter(tags=["Sub-Categories"])


class SubCategoriesByCategoryResponse(ListResponse[SubCategoryResponse]):
    category: CategoryRef


@router.get("", response_model=ListResponse[SubCategoryResponse])
async def list_subcategories(
    db: DB,
    category: Optional[str] = Query(None, description="Filter by category ID"),
):
    """Active sub-categories, optionally of one category. Public endpoint."""
    subcategories = await SubCategoryService(db).list(
        category_id=parse_optional_id(category, "category ID")
    )
    return ListResponse[SubCategoryResponse](
        data=[SubCategoryResponse.model_validate(s) for s in subcategories],
        count=len(subcategories),
    )


@router.get("/by-category/{slug}", response_model=SubCategoriesByCategoryResponse)
async def list_subcategories_by_category(
    slug: str,
    db: DB,
    navbar: Optional[str] = Query(None, description="Navbar category slug, when the category slug is ambiguous"),
):
    """Active sub-categories of the category with this slug. Public endpoint."""
    category, subcategories = await SubCategoryService(db).list_by_category_slug(slug, navbar_slug=navbar)
    return SubCategoriesByCategoryResponse(
        data=[SubCategoryResponse.model_validate(s) for s in subcategories],
        count=len(subcategories),
        category=CategoryRef.model_validate(category),
    )
