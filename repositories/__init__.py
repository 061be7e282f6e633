"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.ingredient_repository import IngredientRepository
from repositories.submission_repository import (
    SubmissionRepository,
    SubmissionIngredientRepository,
)
from repositories.grocery_repository import (
    GroceryCheckinRepository,
    GroceryAggregateRepository,
)
from repositories.kitchen_resource_repository import KitchenResourceRepository
from repositories.notification_repository import NotificationRepository
from repositories.organizer_repository import OrganizerRepository

__all__ = [
    "BaseRepository",
    "IngredientRepository",
    "SubmissionRepository",
    "SubmissionIngredientRepository",
    "GroceryCheckinRepository",
    "GroceryAggregateRepository",
    "KitchenResourceRepository",
    "NotificationRepository",
    "OrganizerRepository",
]
