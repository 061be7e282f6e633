"""
Ingredient Repository - Data access layer for the grocery catalog
"""

from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from domain.models import Ingredient
from repositories.base import BaseRepository


class IngredientRepository(BaseRepository[Ingredient]):
    """Repository for catalog data"""

    def __init__(self, db: Session):
        super().__init__(db, Ingredient)

    def get_by_product_id(self, product_id: str) -> Optional[Ingredient]:
        """Get ingredient by the store's stable product key"""
        return (
            self.db.query(Ingredient)
            .filter(Ingredient.product_id == product_id)
            .first()
        )

    def get_many(self, ingredient_ids: Iterable[int]) -> Dict[int, Ingredient]:
        """Load several ingredients at once, keyed by id; unknown ids are absent"""
        ids = set(ingredient_ids)
        if not ids:
            return {}
        rows = self.db.query(Ingredient).filter(Ingredient.id.in_(ids)).all()
        return {row.id: row for row in rows}

    def get_all_ordered(self) -> List[Ingredient]:
        """Whole catalog ordered by name (id breaks ties)"""
        return self.db.query(Ingredient).order_by(Ingredient.name, Ingredient.id).all()
