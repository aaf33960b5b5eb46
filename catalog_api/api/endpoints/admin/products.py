from typing import Optional

from fastapi import APIRouter, Query, status

from catalog_api.api.deps import DB
from catalog_api.core.ids import parse_id, parse_optional_id
from catalog_api.schemas.base import DataResponse, ListResponse
from catalog_api.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from catalog_api.services.product_service import ProductService


router = APIRouter(tags=["Admin Products"])

ID_LABEL = "product ID"


@router.get("", response_model=ListResponse[ProductResponse])
async def list_products(
    db: DB,
    navbar_category: Optional[str] = Query(None, alias="navbarCategory"),
    category: Optional[str] = Query(None),
    subcategory: Optional[str] = Query(None),
):
    """All products (inactive included), newest first."""
    products = await ProductService(db).list(
        navbar_category_id=parse_optional_id(navbar_category, "navbar category ID"),
        category_id=parse_optional_id(category, "category ID"),
        subcategory_id=parse_optional_id(subcategory, "subcategory ID"),
        include_inactive=True,
    )
    return ListResponse[ProductResponse](
        data=[ProductResponse.model_validate(p) for p in products],
        count=len(products),
    )


@router.post("", response_model=DataResponse[ProductResponse], status_code=status.HTTP_201_CREATED)
async def create_product(data: ProductCreate, db: DB):
    product = await ProductService(db).create(data)
    return DataResponse[ProductResponse](
        message="Product created successfully",
        data=ProductResponse.model_validate(product),
    )


@router.get("/{product_id}", response_model=DataResponse[ProductResponse])
async def get_product(product_id: str, db: DB):
    product = await ProductService(db).get_or_404(parse_id(product_id, ID_LABEL))
    return DataResponse[ProductResponse](data=ProductResponse.model_validate(product))


@router.put("/{product_id}", response_model=DataResponse[ProductResponse])
async def update_product(product_id: str, data: ProductUpdate, db: DB):
    product = await ProductService(db).update(parse_id(product_id, ID_LABEL), data)
    return DataResponse[ProductResponse](
        message="Product updated successfully",
        data=ProductResponse.model_validate(product),
    )


@router.delete("/{product_id}", response_model=DataResponse[ProductResponse])
async def delete_product(product_id: str, db: DB):
    product = await ProductService(db).delete(parse_id(product_id, ID_LABEL))
    return DataResponse[ProductResponse](
        message="Product deleted successfully",
        data=ProductResponse.model_validate(product),
    )
