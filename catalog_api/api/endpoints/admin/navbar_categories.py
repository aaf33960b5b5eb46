from fastapi import APIRouter, status

from catalog_api.api.deps import DB
from catalog_api.core.ids import parse_id
from catalog_api.schemas.base import DataResponse, ListResponse
from catalog_api.schemas.navbar_category import (
    NavbarCategoryCreate,
    NavbarCategoryUpdate,
    NavbarCategoryResponse,
)
from catalog_api.services.navbar_category_service import NavbarCategoryService


router = APIRouter(tags=["Admin Navbar Categories"])

ID_LABEL = "navbar category ID"


@router.get("", response_model=ListResponse[NavbarCategoryResponse])
async def list_navbar_categories(db: DB):
    """All navbar categories, inactive included."""
    navbar_categories = await NavbarCategoryService(db).list(include_inactive=True)
    return ListResponse[NavbarCategoryResponse](
        data=[NavbarCategoryResponse.model_validate(n) for n in navbar_categories],
        count=len(navbar_categories),
    )


@router.post(
    "",
    response_model=DataResponse[NavbarCategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_navbar_category(data: NavbarCategoryCreate, db: DB):
    navbar_category = await NavbarCategoryService(db).create(data)
    return DataResponse[NavbarCategoryResponse](
        message="Navbar category created successfully",
        data=NavbarCategoryResponse.model_validate(navbar_category),
    )


@router.get("/{navbar_category_id}", response_model=DataResponse[NavbarCategoryResponse])
async def get_navbar_category(navbar_category_id: str, db: DB):
    navbar_category = await NavbarCategoryService(db).get_or_404(
        parse_id(navbar_category_id, ID_LABEL)
    )
    return DataResponse[NavbarCategoryResponse](
        data=NavbarCategoryResponse.model_validate(navbar_category)
    )


@router.put("/{navbar_category_id}", response_model=DataResponse[NavbarCategoryResponse])
async def update_navbar_category(navbar_category_id: str, data: NavbarCategoryUpdate, db: DB):
    """Partial update; renaming regenerates the slug."""
    navbar_category = await NavbarCategoryService(db).update(
        parse_id(navbar_category_id, ID_LABEL), data
    )
    return DataResponse[NavbarCategoryResponse](
        message="Navbar category updated successfully",
        data=NavbarCategoryResponse.model_validate(navbar_category),
    )


@router.delete("/{navbar_category_id}", response_model=DataResponse[NavbarCategoryResponse])
async def delete_navbar_category(navbar_category_id: str, db: DB):
    navbar_category = await NavbarCategoryService(db).delete(
        parse_id(navbar_category_id, ID_LABEL)
    )
    return DataResponse[NavbarCategoryResponse](
        message="Navbar category deleted successfully",
        data=NavbarCategoryResponse.model_validate(navbar_category),
    )
