"""
Admin Notification Service

Notifications are event records shown in the admin dashboard bell: new leads
from the public forms, plus anything the dashboard posts itself.
"""
import logging
from typing import List, Optional

from sqlalchemy import select, func, update as sql_update, delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.exceptions import NotFoundError, ValidationError
from catalog_api.core.ids import parse_id
from catalog_api.models.enquiry import ContactEnquiry, ProductEnquiry, EnquiryStatus
from catalog_api.models.notification import Notification, NotificationType
from catalog_api.schemas.notification import NotificationCreate


logger = logging.getLogger(__name__)

FEED_LIMIT = 50


class NotificationService:
    """Service for admin notifications."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def notify(
        self,
        type: NotificationType,
        title: str,
        message: str,
        icon: str,
        link: Optional[str] = None,
        related_id: Optional[str] = None,
        urgent: bool = False,
        commit: bool = True,
    ) -> Notification:
        """Record a notification. With commit=False it joins the caller's transaction."""
        notification = Notification(
            type=type.value,
            title=title,
            message=message,
            icon=icon,
            link=link,
            related_id=related_id,
            urgent=urgent,
            read=False,
        )
        self.db.add(notification)
        if commit:
            await self.db.commit()
        logger.info("Notification [%s] %s", type.value, title)
        return notification

    async def create(self, data: NotificationCreate) -> Notification:
        if not (data.title and data.message and data.type and data.icon):
            raise ValidationError("Missing required fields: title, message, type, icon")
        try:
            notification_type = NotificationType(data.type)
        except ValueError:
            raise ValidationError(f"Invalid notification type: {data.type}")

        return await self.notify(
            notification_type,
            title=data.title,
            message=data.message,
            icon=data.icon,
            link=data.link or None,
            related_id=data.related_id or None,
            urgent=bool(data.urgent),
        )

    async def get_feed(self) -> dict:
        """Newest notifications, unread count among them, and pending lead count."""
        result = await self.db.execute(
            select(Notification)
            .order_by(Notification.created_at.desc())
            .limit(FEED_LIMIT)
        )
        notifications: List[Notification] = list(result.scalars().all())

        pending = 0
        for model in (ProductEnquiry, ContactEnquiry):
            count = await self.db.execute(
                select(func.count(model.id)).where(model.status == EnquiryStatus.PENDING.value)
            )
            pending += count.scalar() or 0

        return {
            "notifications": notifications,
            "unread_count": sum(1 for n in notifications if not n.read),
            "pending_enquiries": pending,
        }

    async def mark_read(self, notification_id: str) -> Notification:
        result = await self.db.execute(
            select(Notification).where(Notification.id == parse_id(notification_id))
        )
        notification = result.scalar_one_or_none()
        if not notification:
            raise NotFoundError("Notification not found")

        notification.read = True
        await self.db.commit()
        return notification

    async def mark_all_read(self) -> int:
        result = await self.db.execute(
            sql_update(Notification).where(Notification.read == False).values(read=True)
        )
        await self.db.commit()
        return result.rowcount

    async def clear_all(self) -> int:
        result = await self.db.execute(sql_delete(Notification))
        await self.db.commit()
        logger.info("Cleared %d notifications", result.rowcount)
        return result.rowcount
