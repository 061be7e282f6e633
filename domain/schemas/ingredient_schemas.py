"""Schemas for the grocery ingredient catalog"""

from pydantic import BaseModel, Field
from typing import Optional


class DietaryFlags(BaseModel):
    """Boolean dietary attributes of a catalog product"""

    is_alcohol: bool = False
    gluten: bool = False
    dairy: bool = False
    egg: bool = False
    peanut: bool = False
    kosher: bool = False
    vegan: bool = False
    vegetarian: bool = False
    lactose_free: bool = False
    wheat_free: bool = False
    pork: bool = False
    shellfish: bool = False


class GroceryIngredient(BaseModel):
    """Subset of catalog fields shown on shopping list rows"""

    id: int
    product_id: str
    name: str
    size: Optional[str] = None
    aisle: Optional[str] = None
    price_cents: int = 0
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class IngredientSummary(GroceryIngredient):
    """Catalog entry as embedded in submission line items"""

    dietary: DietaryFlags = Field(default_factory=DietaryFlags)


class IngredientResponse(IngredientSummary):
    """Full catalog entry, including category and decimal price"""

    category: Optional[str] = None
    price: float = Field(0.0, description="price_cents / 100, computed on read")


class IngredientImport(BaseModel):
    """One catalog entry as supplied by a bulk catalog import"""

    product_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    size: Optional[str] = None
    aisle: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    price_cents: int = Field(0, ge=0)
    dietary: DietaryFlags = Field(default_factory=DietaryFlags)
