from typing import Optional

from fastapi import APIRouter, Query, status

from catalog_api.api.deps import DB
from catalog_api.core.ids import parse_id, parse_optional_id
from catalog_api.schemas.base import DataResponse, ListResponse
from catalog_api.schemas.subcategory import SubCategoryCreate, SubCategoryUpdate, SubCategoryResponse
from catalog_api.services.subcategory_service import SubCategoryService


router = APIRouter(tags=["Admin Sub-Categories"])

ID_LABEL = "sub-category ID"


@router.get("", response_model=ListResponse[SubCategoryResponse])
async def list_subcategories(
    db: DB,
    category: Optional[str] = Query(None),
):
    subcategories = await SubCategoryService(db).list(
        category_id=parse_optional_id(category, "category ID"),
        include_inactive=True,
    )
    return ListResponse[SubCategoryResponse](
        data=[SubCategoryResponse.model_validate(s) for s in subcategories],
        count=len(subcategories),
    )


@router.post("", response_model=DataResponse[SubCategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_subcategory(data: SubCategoryCreate, db: DB):
    subcategory = await SubCategoryService(db).create(data)
    return DataResponse[SubCategoryResponse](
        message="Sub-category created successfully",
        data=SubCategoryResponse.model_validate(subcategory),
    )


@router.get("/{subcategory_id}", response_model=DataResponse[SubCategoryResponse])
async def get_subcategory(subcategory_id: str, db: DB):
    subcategory = await SubCategoryService(db).get_or_404(parse_id(subcategory_id, ID_LABEL))
    return DataResponse[SubCategoryResponse](data=SubCategoryResponse.model_validate(subcategory))


@router.put("/{subcategory_id}", response_model=DataResponse[SubCategoryResponse])
async def update_subcategory(subcategory_id: str, data: SubCategoryUpdate, db: DB):
    subcategory = await SubCategoryService(db).update(parse_id(subcategory_id, ID_LABEL), data)
    return DataResponse[SubCategoryResponse](
        message="Sub-category updated successfully",
        data=SubCategoryResponse.model_validate(subcategory),
    )


@router.delete("/{subcategory_id}", response_model=DataResponse[SubCategoryResponse])
async def delete_subcategory(subcategory_id: str, db: DB):
    subcategory = await SubCategoryService(db).delete(parse_id(subcategory_id, ID_LABEL))
    return DataResponse[SubCategoryResponse](
        message="Sub-category deleted successfully",
        data=SubCategoryResponse.model_validate(subcategory),
    )
