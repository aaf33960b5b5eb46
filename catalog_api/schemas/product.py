from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import field_validator

from catalog_api.schemas.base import BaseCreateSchema, BaseUpdateSchema, BaseResponseSchema, ParentRef


class ProductCreate(BaseCreateSchema):
    """
    Create payload.

    ``navbarCategory`` is optional: it is always derived from the category,
    and a value that disagrees with the category is rejected.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    key_features: Optional[List[str]] = None
    image1: Optional[str] = None
    image2: Optional[str] = None
    image3: Optional[str] = None
    image4: Optional[str] = None
    navbar_category: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("key_features")
    @classmethod
    def clean_key_features(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Trim features and drop blank ones, keeping their order."""
        if v is None:
            return v
        return [feature.strip() for feature in v if feature and feature.strip()]


class ProductUpdate(ProductCreate):
    """Partial update; send ``subcategory: ""`` (or null) to detach a subcategory."""
    pass


class ProductResponse(BaseResponseSchema):
    """Product with navbar category, category and subcategory populated."""
    id: UUID
    name: str
    slug: str
    description: str
    key_features: List[str]
    image1: str
    image2: str
    image3: str
    image4: str
    images: List[str]
    is_active: bool
    navbar_category: ParentRef
    category: ParentRef
    subcategory: Optional[ParentRef] = None
    created_at: datetime
    updated_at: datetime
