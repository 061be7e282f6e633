"""Services package - Business logic layer"""

from services.ingredient_service import IngredientService
from services.submission_service import SubmissionService
from services.grocery_list_service import GroceryListService
from services.kitchen_resource_service import KitchenResourceService
from services.notification_service import NotificationService, Notifier
from services.organizer_service import OrganizerService

# Note: search and phone contain pure helper functions, not classes

__all__ = [
    "IngredientService",
    "SubmissionService",
    "GroceryListService",
    "KitchenResourceService",
    "NotificationService",
    "Notifier",
    "OrganizerService",
]
