"""
Submission models - one dish per team and its ingredient line items.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    JSON,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class Submission(Base):
    """A team's (or individual's) dish submission"""

    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    team_name = Column(String)
    dish_name = Column(String, nullable=False)
    notes = Column(Text)
    country_code = Column(String)
    # Order matters: members[i] pairs with the i-th phone number.
    members = Column(JSON)
    # Free-form; may hold several comma-separated numbers.
    phone_number = Column(String)

    has_cooking_place = Column(String)
    cooking_location = Column(String)
    found_all_ingredients = Column(String)
    needs_utensils = Column(String)
    needs_fridge_space = Column(String)
    utensils_notes = Column(Text)
    other_ingredients = Column(Text)
    equipment_allocated = Column(String)
    helper_driver_needed = Column(String)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    line_items = relationship(
        "SubmissionIngredient",
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="SubmissionIngredient.id",
    )

    @property
    def member_list(self) -> list:
        return self.members if isinstance(self.members, list) else []

    def __repr__(self):
        return f"<Submission(id={self.id}, dish_name='{self.dish_name}')>"


class SubmissionIngredient(Base):
    """One (submission, ingredient, quantity) line item"""

    __tablename__ = "submission_ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(
        Integer,
        ForeignKey("submissions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    ingredient_id = Column(
        Integer, ForeignKey("ingredients.id"), nullable=False, index=True
    )
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    submission = relationship("Submission", back_populates="line_items")
    ingredient = relationship("Ingredient")

    __table_args__ = (
        UniqueConstraint(
            "submission_id", "ingredient_id", name="uq_submission_ingredient"
        ),
        CheckConstraint("quantity > 0", name="ck_submission_ingredient_quantity_pos"),
    )
