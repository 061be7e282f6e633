"""
Ingredient domain mappers.

Catalog data reaches the API from three shapes: ORM ``Ingredient`` objects,
aggregation rows keyed by ``ingredient_id`` and override-joined rows that
also carry checkin columns. Each is translated once, at the data-access
boundary, into an ``IngredientRecord``; every response variant is built from
that record.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from domain.models import Ingredient, DIETARY_FLAGS
from domain.schemas.ingredient_schemas import (
    DietaryFlags,
    GroceryIngredient,
    IngredientSummary,
    IngredientResponse,
)


@dataclass(frozen=True)
class IngredientRecord:
    """Canonical catalog entry shape used by all serializers."""

    id: int
    product_id: str
    name: str
    size: Optional[str] = None
    aisle: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    price_cents: int = 0
    dietary: Mapping[str, bool] = field(default_factory=dict)

    @property
    def price(self) -> float:
        return self.price_cents / 100


IngredientSource = Union[Ingredient, IngredientRecord, Mapping[str, Any]]


class IngredientMapper:
    """Mapper for catalog transformations."""

    @staticmethod
    def from_orm(ingredient: Ingredient) -> IngredientRecord:
        return IngredientRecord(
            id=ingredient.id,
            product_id=ingredient.product_id,
            name=ingredient.name,
            size=ingredient.size,
            aisle=ingredient.aisle,
            category=ingredient.category,
            image_url=ingredient.image_url,
            price_cents=ingredient.price_cents or 0,
            dietary=ingredient.dietary,
        )

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> IngredientRecord:
        """
        Build a record from an aggregation or override-joined row.

        Rows name the surrogate key ``ingredient_id``; dietary columns are
        optional and default to false when the query did not select them.
        """
        return IngredientRecord(
            id=row["ingredient_id"],
            product_id=row["product_id"],
            name=row["name"],
            size=row.get("size"),
            aisle=row.get("aisle"),
            category=row.get("category"),
            image_url=row.get("image_url"),
            price_cents=row.get("price_cents") or 0,
            dietary={flag: bool(row.get(flag) or False) for flag in DIETARY_FLAGS},
        )

    @staticmethod
    def to_record(source: IngredientSource) -> IngredientRecord:
        if isinstance(source, IngredientRecord):
            return source
        if isinstance(source, Ingredient):
            return IngredientMapper.from_orm(source)
        mapping = getattr(source, "_mapping", source)
        if isinstance(mapping, Mapping):
            return IngredientMapper.from_row(mapping)
        raise TypeError(f"Cannot map {type(source).__name__} to an ingredient record")

    @staticmethod
    def to_grocery(source: IngredientSource) -> GroceryIngredient:
        record = IngredientMapper.to_record(source)
        return GroceryIngredient(
            id=record.id,
            product_id=record.product_id,
            name=record.name,
            size=record.size,
            aisle=record.aisle,
            price_cents=record.price_cents,
            image_url=record.image_url,
        )

    @staticmethod
    def to_summary(source: IngredientSource) -> IngredientSummary:
        record = IngredientMapper.to_record(source)
        return IngredientSummary(
            **IngredientMapper.to_grocery(record).model_dump(),
            dietary=DietaryFlags(**record.dietary),
        )

    @staticmethod
    def to_response(source: IngredientSource) -> IngredientResponse:
        """Full variant: every catalog field plus category and decimal price."""
        record = IngredientMapper.to_record(source)
        return IngredientResponse(
            **IngredientMapper.to_summary(record).model_dump(),
            category=record.category,
            price=record.price,
        )
