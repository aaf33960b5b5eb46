from datetime import datetime
from typing import Optional
from uuid import UUID

from catalog_api.schemas.base import BaseCreateSchema, BaseUpdateSchema, BaseResponseSchema


# ==================== CONTACT ENQUIRY ====================

class ContactEnquiryCreate(BaseCreateSchema):
    """Contact form submission (public)."""
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class ContactEnquiryResponse(BaseResponseSchema):
    id: UUID
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime
    updated_at: datetime


# ==================== PRODUCT ENQUIRY ====================

class ProductEnquiryCreate(BaseCreateSchema):
    """Product page enquiry form submission (public)."""
    product_name: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    description: Optional[str] = None


class ProductEnquiryResponse(BaseResponseSchema):
    id: UUID
    product_name: str
    name: str
    email: str
    mobile: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime


class EnquiryStatusUpdate(BaseUpdateSchema):
    """Admins may only move an enquiry between pending, contacted and resolved."""
    status: Optional[str] = None
