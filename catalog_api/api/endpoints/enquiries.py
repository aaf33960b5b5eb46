from fastapi import APIRouter, status

from catalog_api.api.deps import DB
from catalog_api.schemas.base import DataResponse
from catalog_api.schemas.enquiry import (
    ContactEnquiryCreate,
    ContactEnquiryResponse,
    ProductEnquiryCreate,
    ProductEnquiryResponse,
)
from catalog_api.services.enquiry_service import EnquiryService


router = APIRouter(tags=["Enquiries"])


@router.post(
    "/contact-enquiry",
    response_model=DataResponse[ContactEnquiryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def submit_contact_enquiry(data: ContactEnquiryCreate, db: DB):
    """Contact form submission. Public, unauthenticated."""
    enquiry = await EnquiryService(db).create_contact_enquiry(data)
    return DataResponse[ContactEnquiryResponse](
        message="Thank you for contacting us! We will get back to you soon.",
        data=ContactEnquiryResponse.model_validate(enquiry),
    )


@router.post(
    "/product-enquiry",
    response_model=DataResponse[ProductEnquiryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def submit_product_enquiry(data: ProductEnquiryCreate, db: DB):
    """Product enquiry form submission. Public, unauthenticated."""
    enquiry = await EnquiryService(db).create_product_enquiry(data)
    return DataResponse[ProductEnquiryResponse](
        message="Enquiry submitted successfully! We will contact you soon.",
        data=ProductEnquiryResponse.model_validate(enquiry),
    )
