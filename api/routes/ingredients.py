"""Ingredient catalog routes"""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from api.dependencies import get_db
from app.config import settings
from domain.enums import SearchMode
from domain.mappers import IngredientMapper
from domain.schemas.ingredient_schemas import IngredientResponse
from services.ingredient_service import IngredientService

router = APIRouter(prefix="/ingredients", tags=["Ingredients"])
logger = logging.getLogger("potluck.api.ingredients")


@router.get("", response_model=List[IngredientResponse])
def search_ingredients(
    q: Optional[str] = Query(None, description="Search terms; under 2 characters returns []"),
    mode: Optional[SearchMode] = Query(None, description="lookup (20) or browse (500) cap"),
    db: Session = Depends(get_db),
):
    """Relevance-ranked search over ingredient names"""
    results = IngredientService.search(db, q, mode=mode.value if mode else None)
    return [IngredientMapper.to_response(i) for i in results]


@router.get("/all", response_model=List[IngredientResponse])
def list_all_ingredients(response: Response, db: Session = Depends(get_db)):
    """Full catalog for client-side mirroring"""
    response.headers["Cache-Control"] = f"public, max-age={settings.catalog_cache_max_age}"
    return [IngredientMapper.to_response(i) for i in IngredientService.get_all(db)]


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(ingredient_id: int, db: Session = Depends(get_db)):
    return IngredientMapper.to_response(IngredientService.get_ingredient(db, ingredient_id))
