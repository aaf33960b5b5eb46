from typing import Optional

from fastapi import APIRouter, Query, status

from catalog_api.api.deps import DB
from catalog_api.core.ids import parse_id, parse_optional_id
from catalog_api.schemas.base import DataResponse, ListResponse
from catalog_api.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from catalog_api.services.category_service import CategoryService


router = APIRouter(tags=["Admin Categories"])

ID_LABEL = "category ID"


@router.get("", response_model=ListResponse[CategoryResponse])
async def list_categories(
    db: DB,
    navbar_category: Optional[str] = Query(None, alias="navbarCategory"),
):
    """All categories (inactive included), optionally of one navbar category."""
    categories = await CategoryService(db).list(
        navbar_category_id=parse_optional_id(navbar_category, "navbar category ID"),
        include_inactive=True,
    )
    return ListResponse[CategoryResponse](
        data=[CategoryResponse.model_validate(c) for c in categories],
        count=len(categories),
    )


@router.post("", response_model=DataResponse[CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(data: CategoryCreate, db: DB):
    category = await CategoryService(db).create(data)
    return DataResponse[CategoryResponse](
        message="Category created successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.get("/{category_id}", response_model=DataResponse[CategoryResponse])
async def get_category(category_id: str, db: DB):
    category = await CategoryService(db).get_or_404(parse_id(category_id, ID_LABEL))
    return DataResponse[CategoryResponse](data=CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=DataResponse[CategoryResponse])
async def update_category(category_id: str, data: CategoryUpdate, db: DB):
    """
    Partial update.
    Moving the category to another navbar category also moves its products.
    """
    category = await CategoryService(db).update(parse_id(category_id, ID_LABEL), data)
    return DataResponse[CategoryResponse](
        message="Category updated successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.delete("/{category_id}", response_model=DataResponse[CategoryResponse])
async def delete_category(category_id: str, db: DB):
    category = await CategoryService(db).delete(parse_id(category_id, ID_LABEL))
    return DataResponse[CategoryResponse](
        message="Category deleted successfully",
        data=CategoryResponse.model_validate(category),
    )
