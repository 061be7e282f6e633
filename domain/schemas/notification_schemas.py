"""Schemas for the organizer notification feed"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationEvent(BaseModel):
    """Structured event emitted after a committed mutation"""

    event_type: str
    title: str
    message: Optional[str] = None


class NotificationResponse(NotificationEvent):
    id: int
    read: bool = False
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
