from typing import Optional

from fastapi import APIRouter, Query

from catalog_api.api.deps import DB
from catalog_api.core.ids import parse_id
from catalog_api.models.enquiry import ContactEnquiry, ProductEnquiry
from catalog_api.schemas.base import DataResponse, ListResponse
from catalog_api.schemas.enquiry import (
    ContactEnquiryResponse,
    EnquiryStatusUpdate,
    ProductEnquiryResponse,
)
from catalog_api.services.enquiry_service import EnquiryService


contact_router = APIRouter(tags=["Admin Contact Enquiries"])
product_router = APIRouter(tags=["Admin Product Enquiries"])

ID_LABEL = "enquiry ID"


# ==================== CONTACT ENQUIRIES ====================

@contact_router.get("", response_model=ListResponse[ContactEnquiryResponse])
async def list_contact_enquiries(
    db: DB,
    status: Optional[str] = Query(None, description="pending, contacted or resolved"),
):
    enquiries = await EnquiryService(db).list(ContactEnquiry, status=status)
    return ListResponse[ContactEnquiryResponse](
        data=[ContactEnquiryResponse.model_validate(e) for e in enquiries],
        count=len(enquiries),
    )


@contact_router.get("/{enquiry_id}", response_model=DataResponse[ContactEnquiryResponse])
async def get_contact_enquiry(enquiry_id: str, db: DB):
    enquiry = await EnquiryService(db).get_or_404(ContactEnquiry, parse_id(enquiry_id, ID_LABEL))
    return DataResponse[ContactEnquiryResponse](data=ContactEnquiryResponse.model_validate(enquiry))


@contact_router.put("/{enquiry_id}", response_model=DataResponse[ContactEnquiryResponse])
async def update_contact_enquiry_status(enquiry_id: str, data: EnquiryStatusUpdate, db: DB):
    enquiry = await EnquiryService(db).update_status(
        ContactEnquiry, parse_id(enquiry_id, ID_LABEL), data.status
    )
    return DataResponse[ContactEnquiryResponse](
        message="Enquiry status updated successfully",
        data=ContactEnquiryResponse.model_validate(enquiry),
    )


@contact_router.delete("/{enquiry_id}", response_model=DataResponse[ContactEnquiryResponse])
async def delete_contact_enquiry(enquiry_id: str, db: DB):
    enquiry = await EnquiryService(db).delete(ContactEnquiry, parse_id(enquiry_id, ID_LABEL))
    return DataResponse[ContactEnquiryResponse](
        message="Enquiry deleted successfully",
        data=ContactEnquiryResponse.model_validate(enquiry),
    )


# ==================== PRODUCT ENQUIRIES ====================

@product_router.get("", response_model=ListResponse[ProductEnquiryResponse])
async def list_product_enquiries(
    db: DB,
    status: Optional[str] = Query(None, description="pending, contacted or resolved"),
):
    enquiries = await EnquiryService(db).list(ProductEnquiry, status=status)
    return ListResponse[ProductEnquiryResponse](
        data=[ProductEnquiryResponse.model_validate(e) for e in enquiries],
        count=len(enquiries),
    )


@product_router.get("/{enquiry_id}", response_model=DataResponse[ProductEnquiryResponse])
async def get_product_enquiry(enquiry_id: str, db: DB):
    enquiry = await EnquiryService(db).get_or_404(ProductEnquiry, parse_id(enquiry_id, ID_LABEL))
    return DataResponse[ProductEnquiryResponse](data=ProductEnquiryResponse.model_validate(enquiry))


@product_router.put("/{enquiry_id}", response_model=DataResponse[ProductEnquiryResponse])
async def update_product_enquiry_status(enquiry_id: str, data: EnquiryStatusUpdate, db: DB):
    enquiry = await EnquiryService(db).update_status(
        ProductEnquiry, parse_id(enquiry_id, ID_LABEL), data.status
    )
    return DataResponse[ProductEnquiryResponse](
        message="Enquiry status updated successfully",
        data=ProductEnquiryResponse.model_validate(enquiry),
    )


@product_router.delete("/{enquiry_id}", response_model=DataResponse[ProductEnquiryResponse])
async def delete_product_enquiry(enquiry_id: str, db: DB):
    enquiry = await EnquiryService(db).delete(ProductEnquiry, parse_id(enquiry_id, ID_LABEL))
    return DataResponse[ProductEnquiryResponse](
        message="Enquiry deleted successfully",
        data=ProductEnquiryResponse.model_validate(enquiry),
    )
