"""
Organizer Repository - Data access layer for privileged accounts
"""

from typing import Optional
from sqlalchemy.orm import Session

from domain.models import Organizer
from repositories.base import BaseRepository


class OrganizerRepository(BaseRepository[Organizer]):
    def __init__(self, db: Session):
        super().__init__(db, Organizer)

    def get_by_username(self, username: str) -> Optional[Organizer]:
        return self.db.query(Organizer).filter(Organizer.username == username).first()

    def get_by_token(self, token: str) -> Optional[Organizer]:
        if not token:
            return None
        return self.db.query(Organizer).filter(Organizer.token == token).first()
