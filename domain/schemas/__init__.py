"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.ingredient_schemas import (
    DietaryFlags,
    GroceryIngredient,
    IngredientSummary,
    IngredientResponse,
    IngredientImport,
)
from domain.schemas.submission_schemas import (
    LineItemInput,
    SubmissionCreate,
    SubmissionUpdate,
    IngredientAddRequest,
    IngredientQuantityRequest,
    LineItemResponse,
    SubmissionResponse,
)
from domain.schemas.grocery_schemas import (
    GroceryItemResponse,
    GroceryListResponse,
    GroceryItemUpdate,
    GroceryItemCreate,
    GroceryCheckinResponse,
)
from domain.schemas.resource_schemas import (
    KitchenResourceCreate,
    KitchenResourceUpdate,
    KitchenResourceResponse,
)
from domain.schemas.notification_schemas import NotificationEvent, NotificationResponse
from domain.schemas.session_schemas import OrganizerLogin, OrganizerSessionResponse

__all__ = [
    # Catalog schemas
    "DietaryFlags",
    "GroceryIngredient",
    "IngredientSummary",
    "IngredientResponse",
    "IngredientImport",
    # Submission schemas
    "LineItemInput",
    "SubmissionCreate",
    "SubmissionUpdate",
    "IngredientAddRequest",
    "IngredientQuantityRequest",
    "LineItemResponse",
    "SubmissionResponse",
    # Grocery schemas
    "GroceryItemResponse",
    "GroceryListResponse",
    "GroceryItemUpdate",
    "GroceryItemCreate",
    "GroceryCheckinResponse",
    # Roster schemas
    "KitchenResourceCreate",
    "KitchenResourceUpdate",
    "KitchenResourceResponse",
    # Notification / session schemas
    "NotificationEvent",
    "NotificationResponse",
    "OrganizerLogin",
    "OrganizerSessionResponse",
]
