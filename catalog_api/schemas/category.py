from datetime import datetime
from typing import Optional
from uuid import UUID

from catalog_api.schemas.base import BaseCreateSchema, BaseUpdateSchema, BaseResponseSchema, ParentRef


class CategoryCreate(BaseCreateSchema):
    name: Optional[str] = None
    navbar_category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryUpdate(BaseUpdateSchema):
    """Partial update. Moving to another navbar category is allowed."""
    name: Optional[str] = None
    navbar_category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryRef(ParentRef):
    """Category reference with its own navbar category expanded."""
    navbar_category: Optional[ParentRef] = None


class CategoryResponse(BaseResponseSchema):
    """Category with its navbar category populated."""
    id: UUID
    name: str
    slug: str
    description: str
    image: str
    order: int
    is_active: bool
    navbar_category: ParentRef
    created_at: datetime
    updated_at: datetime
