import logging
import uuid
from typing import List, Optional, Type, Union

from email_validator import validate_email, EmailNotValidError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.exceptions import NotFoundError, ValidationError
from catalog_api.models.enquiry import ContactEnquiry, ProductEnquiry, EnquiryStatus
from catalog_api.models.notification import NotificationType
from catalog_api.schemas.enquiry import ContactEnquiryCreate, ProductEnquiryCreate
from catalog_api.services.notification_service import NotificationService


logger = logging.getLogger(__name__)

Enquiry = Union[ContactEnquiry, ProductEnquiry]


def check_email(email: str) -> str:
    """Syntax-only email check (no DNS lookups on the request path)."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Invalid email format")
    return email


def parse_status(value: Optional[str]) -> EnquiryStatus:
    try:
        return EnquiryStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in EnquiryStatus)
        raise ValidationError(f"Invalid status. Must be one of: {allowed}")


class EnquiryService:
    """
    Leads from the public contact and product enquiry forms.

    Visitors create them; admins only change their status or delete them.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_contact_enquiry(self, data: ContactEnquiryCreate) -> ContactEnquiry:
        if not (data.name and data.email and data.subject and data.message):
            raise ValidationError("All fields are required")
        check_email(data.email)

        enquiry = ContactEnquiry(
            name=data.name,
            email=data.email.lower(),
            subject=data.subject,
            message=data.message,
            status=EnquiryStatus.PENDING.value,
        )
        self.db.add(enquiry)
        await self.db.flush()

        await NotificationService(self.db).notify(
            NotificationType.CONTACT_ENQUIRY,
            title="New contact enquiry",
            message=f"{enquiry.name}: {enquiry.subject}",
            icon="mail",
            link="/admin/dashboard/contact-enquiries",
            related_id=str(enquiry.id),
            commit=False,
        )
        await self.db.commit()

        logger.info("Contact enquiry %s received", enquiry.id)
        return enquiry

    async def create_product_enquiry(self, data: ProductEnquiryCreate) -> ProductEnquiry:
        if not (data.product_name and data.name and data.email and data.mobile and data.description):
            raise ValidationError("All fields are required")
        check_email(data.email)

        enquiry = ProductEnquiry(
            product_name=data.product_name,
            name=data.name,
            email=data.email.lower(),
            mobile=data.mobile,
            description=data.description,
            status=EnquiryStatus.PENDING.value,
        )
        self.db.add(enquiry)
        await self.db.flush()

        await NotificationService(self.db).notify(
            NotificationType.PRODUCT_ENQUIRY,
            title="New product enquiry",
            message=f"{enquiry.name} asked about {enquiry.product_name}",
            icon="package",
            link="/admin/dashboard/product-enquiries",
            related_id=str(enquiry.id),
            urgent=True,
            commit=False,
        )
        await self.db.commit()

        logger.info("Product enquiry %s received for '%s'", enquiry.id, enquiry.product_name)
        return enquiry

    async def list(
        self,
        model: Type[Enquiry],
        status: Optional[str] = None
    ) -> List[Enquiry]:
        """Enquiries newest first, optionally filtered by status."""
        stmt = select(model).order_by(model.created_at.desc())
        if status:
            stmt = stmt.where(model.status == parse_status(status).value)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_or_404(self, model: Type[Enquiry], enquiry_id: uuid.UUID) -> Enquiry:
        result = await self.db.execute(select(model).where(model.id == enquiry_id))
        enquiry = result.scalar_one_or_none()
        if not enquiry:
            raise NotFoundError("Enquiry not found")
        return enquiry

    async def update_status(
        self,
        model: Type[Enquiry],
        enquiry_id: uuid.UUID,
        status: Optional[str]
    ) -> Enquiry:
        if not status:
            raise ValidationError("Status is required")
        new_status = parse_status(status)

        enquiry = await self.get_or_404(model, enquiry_id)
        enquiry.status = new_status.value
        await self.db.commit()
        await self.db.refresh(enquiry)

        logger.info("Enquiry %s marked %s", enquiry.id, new_status.value)
        return enquiry

    async def delete(self, model: Type[Enquiry], enquiry_id: uuid.UUID) -> Enquiry:
        enquiry = await self.get_or_404(model, enquiry_id)
        await self.db.delete(enquiry)
        await self.db.commit()

        logger.info("Deleted enquiry %s", enquiry.id)
        return enquiry
