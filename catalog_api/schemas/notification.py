from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from catalog_api.schemas.base import BaseCreateSchema, BaseUpdateSchema, BaseResponseSchema


class NotificationCreate(BaseCreateSchema):
    type: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    icon: Optional[str] = None
    link: Optional[str] = None
    related_id: Optional[str] = None
    urgent: Optional[bool] = None


class NotificationMarkRead(BaseUpdateSchema):
    """Either ``id`` of one notification or ``markAll: true``."""
    id: Optional[str] = None
    mark_all: Optional[bool] = None


class NotificationResponse(BaseResponseSchema):
    id: UUID
    type: str
    title: str
    message: str
    icon: str
    read: bool
    urgent: bool
    link: Optional[str] = None
    related_id: Optional[str] = None
    time: datetime = Field(validation_alias="created_at")


class NotificationFeed(BaseResponseSchema):
    """What the dashboard bell shows: newest notifications plus lead counters."""
    notifications: List[NotificationResponse]
    unread_count: int
    pending_enquiries: int


class NotificationCount(BaseResponseSchema):
    modified_count: Optional[int] = None
    deleted_count: Optional[int] = None
