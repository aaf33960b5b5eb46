"""Database model for admin notifications."""
import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Boolean, DateTime, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.database import Base
from catalog_api.db_types import UUIDType


class NotificationType(str, enum.Enum):
    """Types of admin notifications."""
    # Catalog
    PRODUCT = "product"
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    NAVBAR_CATEGORY = "navbar_category"

    # Leads
    PRODUCT_ENQUIRY = "product_enquiry"
    CONTACT_ENQUIRY = "contact_enquiry"

    # General
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notification(Base):
    """
    Notification model - event records shown in the admin dashboard.
    """
    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    type: Mapped[str] = mapped_column(String(30), nullable=False, comment="product, product_enquiry, contact_enquiry, info, ...")
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(String(50), nullable=False)

    # Optional action link and related entity
    link: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    related_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    urgent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    __table_args__ = (
        Index('ix_notifications_created', 'created_at'),
        Index('ix_notifications_read_created', 'read', 'created_at'),
        Index('ix_notifications_type_created', 'type', 'created_at'),
    )
