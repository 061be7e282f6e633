"""
Grocery Repository - Aggregation queries and organizer override records
"""

from collections import defaultdict
from typing import Dict, List, Optional, Set
from sqlalchemy import select, func
from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import Session

from domain.models import GroceryCheckin, Ingredient, Submission, SubmissionIngredient
from repositories.base import BaseRepository


class GroceryCheckinRepository(BaseRepository[GroceryCheckin]):
    """Repository for per-ingredient checked/quantity override records"""

    def __init__(self, db: Session):
        super().__init__(db, GroceryCheckin)

    def get_by_ingredient_id(self, ingredient_id: int) -> Optional[GroceryCheckin]:
        return (
            self.db.query(GroceryCheckin)
            .filter(GroceryCheckin.ingredient_id == ingredient_id)
            .first()
        )


class GroceryAggregateRepository:
    """Read-only aggregation over every submission's line items"""

    def __init__(self, db: Session):
        self.db = db

    def demand_with_overrides(self) -> List[RowMapping]:
        """
        One row per ingredient with any line item: catalog columns, the summed
        quantity across submissions, and the left-joined checkin columns
        (all null when no override record exists).
        """
        stmt = (
            select(
                Ingredient.id.label("ingredient_id"),
                Ingredient.product_id,
                Ingredient.name,
                Ingredient.size,
                Ingredient.aisle,
                Ingredient.price_cents,
                Ingredient.image_url,
                func.sum(SubmissionIngredient.quantity).label("aggregated_quantity"),
                GroceryCheckin.checked,
                GroceryCheckin.checked_by,
                GroceryCheckin.checked_at,
                GroceryCheckin.quantity_override,
            )
            .select_from(SubmissionIngredient)
            .join(Submission, SubmissionIngredient.submission_id == Submission.id)
            .join(Ingredient, SubmissionIngredient.ingredient_id == Ingredient.id)
            .outerjoin(GroceryCheckin, GroceryCheckin.ingredient_id == Ingredient.id)
            .group_by(Ingredient.id, GroceryCheckin.id)
        )
        return list(self.db.execute(stmt).mappings().all())

    def teams_by_ingredient(self) -> Dict[int, Set[str]]:
        """Distinct contributing team names per ingredient id"""
        stmt = (
            select(SubmissionIngredient.ingredient_id, Submission.team_name)
            .join(Submission, SubmissionIngredient.submission_id == Submission.id)
            .distinct()
        )
        teams: Dict[int, Set[str]] = defaultdict(set)
        for ingredient_id, team_name in self.db.execute(stmt).all():
            if team_name:
                teams[ingredient_id].add(team_name)
        return teams
