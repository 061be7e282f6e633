"""Schemas for dish submissions and their ingredient line items"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from domain.schemas.ingredient_schemas import IngredientSummary


class LineItemInput(BaseModel):
    """Desired (ingredient, quantity) pair in a create or update request"""

    ingredient_id: int
    quantity: int = Field(1, gt=0, description="Units of the product; must be positive")


class SubmissionFields(BaseModel):
    """Scalar submission fields shared by create and update requests"""

    team_name: Optional[str] = None
    notes: Optional[str] = None
    country_code: Optional[str] = None
    members: Optional[List[str]] = None
    phone_number: Optional[str] = None
    has_cooking_place: Optional[str] = None
    cooking_location: Optional[str] = None
    found_all_ingredients: Optional[str] = None
    needs_utensils: Optional[str] = None
    needs_fridge_space: Optional[str] = None
    utensils_notes: Optional[str] = None
    other_ingredients: Optional[str] = None
    equipment_allocated: Optional[str] = None
    helper_driver_needed: Optional[str] = None

    @field_validator(
        "country_code",
        "phone_number",
        "has_cooking_place",
        "cooking_location",
        "found_all_ingredients",
        "needs_utensils",
        "needs_fridge_space",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SubmissionCreate(SubmissionFields):
    dish_name: str = Field(..., description="Name of the dish")
    ingredients: List[LineItemInput] = Field(default_factory=list)

    @field_validator("dish_name")
    @classmethod
    def dish_name_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("dish_name can't be blank")
        return v.strip()


class SubmissionUpdate(SubmissionFields):
    """
    Full reconciling update.

    Only fields present in the body are written. When ``ingredients`` is
    present it is the complete desired line item set for the submission.
    """

    dish_name: Optional[str] = None
    ingredients: Optional[List[LineItemInput]] = None

    @field_validator("dish_name")
    @classmethod
    def dish_name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("dish_name can't be blank")
        return v.strip() if v is not None else v


class IngredientAddRequest(BaseModel):
    ingredient_id: int
    quantity: Optional[int] = Field(
        None, description="Units to add; missing or below 1 adds a single unit"
    )


class IngredientQuantityRequest(BaseModel):
    quantity: int = Field(0, description="New quantity; 0 or below removes the line item")


class LineItemResponse(BaseModel):
    ingredient: IngredientSummary
    quantity: int


class SubmissionResponse(BaseModel):
    id: int
    team_name: Optional[str] = None
    dish_name: str
    notes: Optional[str] = None
    country_code: Optional[str] = None
    members: List[str] = Field(default_factory=list)
    phone_number: Optional[str] = None
    has_cooking_place: Optional[str] = None
    cooking_location: Optional[str] = None
    found_all_ingredients: Optional[str] = None
    needs_utensils: Optional[str] = None
    needs_fridge_space: Optional[str] = None
    utensils_notes: Optional[str] = None
    other_ingredients: Optional[str] = None
    equipment_allocated: Optional[str] = None
    helper_driver_needed: Optional[str] = None
    submitted_at: Optional[datetime] = None
    ingredients: List[LineItemResponse] = Field(default_factory=list)
