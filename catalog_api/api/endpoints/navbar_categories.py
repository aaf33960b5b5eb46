from fastapi import APIRouter

from catalog_api.api.deps import DB
from catalog_api.schemas.base import ListResponse
from catalog_api.schemas.navbar_category import NavbarCategoryResponse
from catalog_api.services.navbar_category_service import NavbarCategoryService


router = APIRouter(tags=["Navbar Categories"])


@router.get("", response_model=ListResponse[NavbarCategoryResponse])
async def list_navbar_categories(db: DB):
    """Active navbar categories in menu order. Public endpoint."""
    navbar_categories = await NavbarCategoryService(db).list()
    return ListResponse[NavbarCategoryResponse](
        data=[NavbarCategoryResponse.model_validate(n) for n in navbar_categories],
        count=len(navbar_categories),
    )
