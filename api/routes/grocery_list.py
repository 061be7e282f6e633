"""Aggregated grocery list routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_notifier, require_organizer
from domain.models import Organizer
from domain.schemas.grocery_schemas import (
    GroceryCheckinResponse,
    GroceryItemCreate,
    GroceryItemUpdate,
    GroceryListResponse,
)
from services.grocery_list_service import GroceryListService
from services.notification_service import Notifier

router = APIRouter(prefix="/grocery_list", tags=["Grocery List"])
logger = logging.getLogger("potluck.api.grocery_list")


@router.get("", response_model=GroceryListResponse)
def get_grocery_list(db: Session = Depends(get_db)):
    """Shopping list grouped by aisle, recomputed on every request"""
    return GroceryListService.build(db)


@router.post(
    "/items", response_model=GroceryListResponse, status_code=status.HTTP_201_CREATED
)
def add_grocery_item(
    payload: GroceryItemCreate,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    organizer: Organizer = Depends(require_organizer),
):
    """Organizer ad-hoc addition through the reserved organizer submission"""
    return GroceryListService.add_item(
        db, payload.ingredient_id, payload.quantity, organizer.username, notifier
    )


@router.patch("/{ingredient_id}", response_model=GroceryCheckinResponse)
def update_grocery_item(
    ingredient_id: int,
    payload: GroceryItemUpdate,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    organizer: Organizer = Depends(require_organizer),
):
    """Partial override update: ``checked`` and/or ``quantity``"""
    checkin = GroceryListService.update_item(
        db, ingredient_id, payload, organizer.username, notifier
    )
    return GroceryCheckinResponse.model_validate(checkin)
