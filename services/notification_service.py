"""Notification feed service and the post-commit notifier."""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.config import settings
from domain.enums import Channel
from domain.models import Notification
from repositories import NotificationRepository

logger = logging.getLogger("potluck.notifications")


class NotificationService:
    """Business logic for the organizer activity feed."""

    @staticmethod
    def create(
        db: Session, event_type: str, title: str, message: Optional[str] = None
    ) -> Notification:
        repo = NotificationRepository(db)
        return repo.create(
            Notification(event_type=event_type, title=title, message=message, read=False)
        )

    @staticmethod
    def get_recent(db: Session, limit: Optional[int] = None) -> List[Notification]:
        """Most recent notifications, capped to the feed limit"""
        return NotificationRepository(db).get_recent(
            limit or settings.notification_feed_limit
        )

    @staticmethod
    def mark_all_read(db: Session) -> int:
        count = NotificationRepository(db).mark_all_read()
        logger.info("Marked %d notifications read", count)
        return count

    @staticmethod
    def to_payload(notification: Notification) -> dict:
        return {
            "id": notification.id,
            "event_type": notification.event_type,
            "title": notification.title,
            "message": notification.message,
            "read": bool(notification.read),
            "created_at": (
                notification.created_at.isoformat() if notification.created_at else None
            ),
        }


class Notifier:
    """
    Side-effect collaborator invoked by services after a mutation commits.

    Delivery is best-effort: persistence or broadcast failures are logged
    and never propagate to the caller, whose write has already committed.
    """

    def __init__(self, db: Session, broadcaster=None):
        self.db = db
        self.broadcaster = broadcaster

    def emit(
        self, event_type: str, title: str, message: Optional[str] = None
    ) -> Optional[Notification]:
        """Record a feed notification and broadcast it on the notifications channel."""
        event_type = getattr(event_type, "value", event_type)
        try:
            notification = NotificationService.create(self.db, event_type, title, message)
        except Exception:
            self.db.rollback()
            logger.warning("Failed to record %s notification", event_type, exc_info=True)
            return None

        self.publish(
            Channel.NOTIFICATIONS,
            {"type": event_type, "notification": NotificationService.to_payload(notification)},
        )
        return notification

    def publish(self, channel, payload: Mapping[str, Any]) -> None:
        """Broadcast a raw payload to live subscribers of ``channel``."""
        if self.broadcaster is None:
            return
        channel = getattr(channel, "value", channel)
        try:
            self.broadcaster.publish(channel, dict(payload))
        except Exception:
            logger.warning("Broadcast on %s failed", channel, exc_info=True)
