from fastapi import APIRouter, status

from catalog_api.api.deps import DB
from catalog_api.core.exceptions import ValidationError
from catalog_api.schemas.base import DataResponse
from catalog_api.schemas.notification import (
    NotificationCount,
    NotificationCreate,
    NotificationFeed,
    NotificationMarkRead,
    NotificationResponse,
)
from catalog_api.services.notification_service import NotificationService


router = APIRouter(tags=["Admin Notifications"])


@router.get("", response_model=DataResponse[NotificationFeed])
async def get_notifications(db: DB):
    """The 50 newest notifications, how many of them are unread, and pending leads."""
    feed = await NotificationService(db).get_feed()
    return DataResponse[NotificationFeed](
        data=NotificationFeed(
            notifications=[NotificationResponse.model_validate(n) for n in feed["notifications"]],
            unread_count=feed["unread_count"],
            pending_enquiries=feed["pending_enquiries"],
        )
    )


@router.post("", response_model=DataResponse[NotificationResponse], status_code=status.HTTP_201_CREATED)
async def create_notification(data: NotificationCreate, db: DB):
    notification = await NotificationService(db).create(data)
    return DataResponse[NotificationResponse](
        message="Notification created",
        data=NotificationResponse.model_validate(notification),
    )


@router.put("")
async def mark_notifications_read(data: NotificationMarkRead, db: DB):
    """Mark one notification (``id``) or all of them (``markAll``) as read."""
    service = NotificationService(db)

    if data.mark_all:
        modified = await service.mark_all_read()
        return DataResponse[NotificationCount](
            message="All notifications marked as read",
            data=NotificationCount(modified_count=modified),
        )

    if data.id:
        notification = await service.mark_read(data.id)
        return DataResponse[NotificationResponse](
            message="Notification marked as read",
            data=NotificationResponse.model_validate(notification),
        )

    raise ValidationError("Missing required field: id or markAll")


@router.delete("", response_model=DataResponse[NotificationCount])
async def clear_notifications(db: DB):
    deleted = await NotificationService(db).clear_all()
    return DataResponse[NotificationCount](
        message="All notifications cleared",
        data=NotificationCount(deleted_count=deleted),
    )
