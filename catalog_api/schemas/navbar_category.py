from datetime import datetime
from typing import Optional
from uuid import UUID

from catalog_api.schemas.base import BaseCreateSchema, BaseUpdateSchema, BaseResponseSchema


class NavbarCategoryCreate(BaseCreateSchema):
    """Create payload. ``name`` is required; the service reports it missing."""
    name: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class NavbarCategoryUpdate(BaseUpdateSchema):
    name: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class NavbarCategoryResponse(BaseResponseSchema):
    id: UUID
    name: str
    slug: str
    description: str
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
