"""
Kitchen Resource Repository - Data access layer for the planning roster
"""

from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from domain.models import KitchenResource
from repositories.base import BaseRepository


class KitchenResourceRepository(BaseRepository[KitchenResource]):
    def __init__(self, db: Session):
        super().__init__(db, KitchenResource)

    def get_all_ordered(self) -> List[KitchenResource]:
        """Roster in default order: kind, then position, then id"""
        return (
            self.db.query(KitchenResource)
            .order_by(KitchenResource.kind, KitchenResource.position, KitchenResource.id)
            .all()
        )

    def next_position(self, kind: str) -> int:
        """One past the highest position used by ``kind`` (1 for an empty kind)"""
        current = (
            self.db.query(func.max(KitchenResource.position))
            .filter(KitchenResource.kind == kind)
            .scalar()
        )
        return (current or 0) + 1
