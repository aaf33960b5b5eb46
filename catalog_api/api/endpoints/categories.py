from typing import Optional

from fastapi import APIRouter

from catalog_api.api.deps import DB
from catalog_api.schemas.base import ListResponse
from catalog_api.schemas.category import CategoryResponse
from catalog_api.schemas.navbar_category import NavbarCategoryResponse
from catalog_api.services.category_service import CategoryService


router = APIRouter(tags=["Categories"])


class CategoriesByNavbarResponse(ListResponse[CategoryResponse]):
    navbar_category: Optional[NavbarCategoryResponse] = None


@router.get("", response_model=ListResponse[CategoryResponse])
async def list_categories(db: DB):
    """
    Active categories of active navbar categories.
    Public endpoint.
    """
    categories = await CategoryService(db).list()
    return ListResponse[CategoryResponse](
        data=[CategoryResponse.model_validate(c) for c in categories],
        count=len(categories),
    )


@router.get("/by-navbar/{slug}", response_model=CategoriesByNavbarResponse)
async def list_categories_by_navbar(slug: str, db: DB):
    """
    Categories shown under one navbar menu entry.
    An unknown or inactive navbar category yields an empty list, not a 404.
    """
    navbar_category, categories = await CategoryService(db).list_by_navbar_slug(slug)
    return CategoriesByNavbarResponse(
        data=[CategoryResponse.model_validate(c) for c in categories],
        count=len(categories),
        navbar_category=(
            NavbarCategoryResponse.model_validate(navbar_category) if navbar_category else None
        ),
    )
