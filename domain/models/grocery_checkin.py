"""
Grocery checkin model - organizer override state per ingredient.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class GroceryCheckin(Base):
    """
    Checked state and optional quantity override for one ingredient.

    Lives independently of submissions: deleting every line item for an
    ingredient leaves its checkin in place.
    """

    __tablename__ = "grocery_checkins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ingredient_id = Column(
        Integer,
        ForeignKey("ingredients.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    checked = Column(Boolean, nullable=False, default=False)
    checked_by = Column(String)
    checked_at = Column(DateTime(timezone=True))
    quantity_override = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    ingredient = relationship("Ingredient", back_populates="grocery_checkin")

    __table_args__ = (
        CheckConstraint(
            "quantity_override IS NULL OR quantity_override >= 0",
            name="ck_grocery_checkin_override_nonneg",
        ),
    )

    def __repr__(self):
        return f"<GroceryCheckin(ingredient_id={self.ingredient_id}, checked={self.checked})>"
