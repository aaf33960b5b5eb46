"""
Base Schema Classes for Pydantic Models

The public site and the admin dashboard speak camelCase JSON (``isActive``,
``navbarCategory``, ``keyFeatures``), so every schema here converts snake_case
field names to camelCase aliases and accepts either spelling on input.

RULE: All response schemas that read from ORM models MUST inherit from BaseResponseSchema.
"""

from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class BaseResponseSchema(BaseModel):
    """
    Base class for all response schemas that read from ORM models.

    Usage:
        class CategoryResponse(BaseResponseSchema):
            id: UUID
            name: str
            navbar_category: ParentRef    # serialized as "navbarCategory"
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BaseCreateSchema(BaseModel):
    """
    Base class for create/input schemas.

    All fields are declared optional so that services can answer a missing
    field with a specific message ("Category name is required") instead of a
    generic validation error.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Allow extra fields to be ignored (forward compatibility)
        extra='ignore',
    )

    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class BaseUpdateSchema(BaseCreateSchema):
    """
    Base class for update/patch schemas.

    Services read them with model_dump(exclude_unset=True), so only the
    fields present in the request body are applied.
    """
    pass


class ParentRef(BaseResponseSchema):
    """Display fields of a referenced parent (the "populated" part of a response)."""
    id: UUID
    name: str
    slug: str


class DataResponse(BaseResponseSchema, Generic[T]):
    """Standard success envelope for a single document."""
    success: bool = True
    message: Optional[str] = None
    data: T


class ListResponse(BaseResponseSchema, Generic[T]):
    """Standard success envelope for a list of documents."""
    success: bool = True
    message: Optional[str] = None
    data: list[T]
    count: int
