"""
Notification Repository - Data access layer for the activity feed
"""

from typing import List
from sqlalchemy.orm import Session

from domain.models import Notification
from repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, db: Session):
        super().__init__(db, Notification)

    def get_recent(self, limit: int = 50) -> List[Notification]:
        """Most recent notifications first"""
        return (
            self.db.query(Notification)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all()
        )

    def mark_all_read(self) -> int:
        """Mark every unread notification read; returns the number updated"""
        updated = (
            self.db.query(Notification)
            .filter(Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        self.db.commit()
        return updated
