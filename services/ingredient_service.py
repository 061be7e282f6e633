"""Ingredient service - grocery catalog lookup, search and import."""

from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
import logging

from app.config import settings
from app.exceptions import NotFoundError
from domain.models import Ingredient, DIETARY_FLAGS
from domain.schemas.ingredient_schemas import IngredientImport
from repositories import IngredientRepository
from services.search import search_catalog, is_searchable

logger = logging.getLogger("potluck.ingredient")


class IngredientService:
    """Business logic for catalog data."""

    @staticmethod
    def get_ingredient(db: Session, ingredient_id: int) -> Ingredient:
        """Direct lookup by id, bypassing ranking."""
        ingredient = IngredientRepository(db).get_by_id(ingredient_id)
        if not ingredient:
            raise NotFoundError(f"Ingredient {ingredient_id} not found")
        return ingredient

    @staticmethod
    def get_all(db: Session) -> List[Ingredient]:
        """Full catalog ordered by name, for client-side mirroring."""
        return IngredientRepository(db).get_all_ordered()

    @staticmethod
    def search(
        db: Session,
        query: Optional[str],
        mode: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Ingredient]:
        """
        Ranked catalog search.

        Scans the whole catalog with the shared ranking function so results
        match the client mirror exactly.
        """
        min_length = settings.search_min_query_length
        if not is_searchable(query or "", min_length):
            return []
        cap = limit or settings.search_limit_for(mode)
        candidates = IngredientRepository(db).get_all_ordered()
        results = search_catalog(query, candidates, cap, min_length=min_length)
        logger.debug("Search %r matched %d (cap %d)", query, len(results), cap)
        return results

    @staticmethod
    def import_catalog(db: Session, entries: Iterable[IngredientImport]) -> dict:
        """
        Upsert catalog entries by product_id in a single transaction.

        Safe to run repeatedly: existing products are updated in place, so
        ingredient ids referenced by line items never change.
        """
        repo = IngredientRepository(db)
        stats = {"created": 0, "updated": 0}
        try:
            for entry in entries:
                values = entry.model_dump(exclude={"dietary"})
                values.update({flag: getattr(entry.dietary, flag) for flag in DIETARY_FLAGS})
                ingredient = repo.get_by_product_id(entry.product_id)
                if ingredient is None:
                    repo.add(Ingredient(**values))
                    stats["created"] += 1
                else:
                    for key, value in values.items():
                        setattr(ingredient, key, value)
                    stats["updated"] += 1
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Catalog import failed")
            raise
        logger.info(
            "Catalog import: %d created, %d updated", stats["created"], stats["updated"]
        )
        return stats
