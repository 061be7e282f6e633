"""Schemas for the aggregated grocery list and organizer overrides"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime

from domain.schemas.ingredient_schemas import GroceryIngredient


class GroceryItemResponse(BaseModel):
    """One ingredient's aggregated demand joined with its override state"""

    ingredient: GroceryIngredient
    total_quantity: int = Field(
        ..., description="Quantity to buy: the override when set, else aggregated demand"
    )
    aggregated_quantity: int = Field(
        ..., description="Sum of line item quantities across all submissions"
    )
    quantity_override: Optional[int] = None
    teams: List[str] = Field(default_factory=list)
    checked: bool = False
    checked_by: Optional[str] = None
    checked_at: Optional[datetime] = None
    line_total_cents: int = 0


class GroceryListResponse(BaseModel):
    """Shopping list grouped by aisle; ``aisles`` preserves display order"""

    aisles: Dict[str, List[GroceryItemResponse]] = Field(default_factory=dict)
    total_cents: int = 0


class GroceryItemUpdate(BaseModel):
    """Partial override update; omitted fields are left untouched"""

    checked: Optional[bool] = None
    quantity: Optional[int] = Field(None, ge=0, description="Quantity override")


class GroceryItemCreate(BaseModel):
    """Organizer ad-hoc addition to the shopping list"""

    ingredient_id: int
    quantity: int = Field(1, gt=0)


class GroceryCheckinResponse(BaseModel):
    ingredient_id: int
    checked: bool
    checked_by: Optional[str] = None
    checked_at: Optional[datetime] = None
    quantity_override: Optional[int] = None

    model_config = {"from_attributes": True}
