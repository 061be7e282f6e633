"""
Ingredient model - Master grocery catalog.
Single source of truth for every product participants can put on a dish.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base

# Display order of the boolean dietary columns.
DIETARY_FLAGS = (
    "is_alcohol",
    "gluten",
    "dairy",
    "egg",
    "peanut",
    "kosher",
    "vegan",
    "vegetarian",
    "lactose_free",
    "wheat_free",
    "pork",
    "shellfish",
)


class Ingredient(Base):
    """
    Grocery catalog entry.

    ``product_id`` is the store's stable product key used as the import key;
    ``id`` is the surrogate key every line item and checkin references.
    Prices are held in integer cents; ``price`` is derived on read.
    """

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False, index=True)
    size = Column(String)
    aisle = Column(String)
    category = Column(String, index=True)
    image_url = Column(String)
    price_cents = Column(Integer, nullable=False, default=0)

    is_alcohol = Column(Boolean, nullable=False, default=False)
    gluten = Column(Boolean, nullable=False, default=False)
    dairy = Column(Boolean, nullable=False, default=False)
    egg = Column(Boolean, nullable=False, default=False)
    peanut = Column(Boolean, nullable=False, default=False)
    kosher = Column(Boolean, nullable=False, default=False)
    vegan = Column(Boolean, nullable=False, default=False)
    vegetarian = Column(Boolean, nullable=False, default=False)
    lactose_free = Column(Boolean, nullable=False, default=False)
    wheat_free = Column(Boolean, nullable=False, default=False)
    pork = Column(Boolean, nullable=False, default=False)
    shellfish = Column(Boolean, nullable=False, default=False)

    scraped_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    grocery_checkin = relationship(
        "GroceryCheckin",
        back_populates="ingredient",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_ingredient_price_nonneg"),
    )

    @property
    def price(self) -> float:
        """Price as a decimal for display"""
        return (self.price_cents or 0) / 100

    @property
    def dietary(self) -> dict:
        return {flag: bool(getattr(self, flag)) for flag in DIETARY_FLAGS}

    def __repr__(self):
        return f"<Ingredient(id={self.id}, product_id='{self.product_id}', name='{self.name}')>"
