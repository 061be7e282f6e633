"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    SessionLocal,
    init_engine,
    get_engine,
    init_database,
    get_db_session,
)
from domain.models.ingredient import Ingredient, DIETARY_FLAGS
from domain.models.submission import Submission, SubmissionIngredient
from domain.models.grocery_checkin import GroceryCheckin
from domain.models.kitchen_resource import KitchenResource
from domain.models.notification import Notification
from domain.models.organizer import Organizer

__all__ = [
    # Database
    "Base",
    "SessionLocal",
    "init_engine",
    "get_engine",
    "init_database",
    "get_db_session",
    # Catalog
    "Ingredient",
    "DIETARY_FLAGS",
    # Submission ledger
    "Submission",
    "SubmissionIngredient",
    # Grocery overrides
    "GroceryCheckin",
    # Planning
    "KitchenResource",
    "Notification",
    "Organizer",
]
