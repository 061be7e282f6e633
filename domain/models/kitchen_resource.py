"""
Kitchen resource model - organizer roster of kitchens, utensils, fridges and helpers.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from domain.models.database import Base


class KitchenResource(Base):
    """Manually ordered roster entry; ``position`` orders entries within a kind."""

    __tablename__ = "kitchen_resources"

    id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    position = Column(Integer)
    point_person = Column(String)
    phone = Column(String)
    is_driver = Column(Boolean)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
