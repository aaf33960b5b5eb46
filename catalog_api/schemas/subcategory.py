from datetime import datetime
from typing import Optional
from uuid import UUID

from catalog_api.schemas.base import BaseCreateSchema, BaseUpdateSchema, BaseResponseSchema, ParentRef
from catalog_api.schemas.category import CategoryRef


class SubCategoryCreate(BaseCreateSchema):
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class SubCategoryUpdate(BaseUpdateSchema):
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class SubCategoryRef(ParentRef):
    """Sub-category reference with its category (and that category's navbar category)."""
    category: CategoryRef


class SubCategoryResponse(BaseResponseSchema):
    id: UUID
    name: str
    slug: str
    description: str
    image: str
    order: int
    is_active: bool
    category: CategoryRef
    created_at: datetime
    updated_at: datetime
