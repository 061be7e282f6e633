"""
Domain enums for the Potluck application.
Contains all enumeration types used across the domain models.
"""

import enum


class ResourceKind(str, enum.Enum):
    """Kinds of organizer-managed kitchen planning resources"""

    KITCHEN = "kitchen"
    UTENSIL = "utensil"
    HELPER_DRIVER = "helper_driver"
    FRIDGE = "fridge"


class EventType(str, enum.Enum):
    """Notification feed event tags"""

    NEW_SUBMISSION = "new_submission"
    SUBMISSION_UPDATED_ORGANIZER = "submission_updated_organizer"
    SUBMISSION_UPDATED_USER = "submission_updated_user"
    SUBMISSION_DELETED = "submission_deleted"
    INGREDIENT_ADDED = "ingredient_added"
    INGREDIENT_UPDATED = "ingredient_updated"
    INGREDIENT_REMOVED = "ingredient_removed"
    GROCERY_ITEM_ADDED = "grocery_item_added"
    GROCERY_ITEM_CHECKED = "grocery_item_checked"
    GROCERY_ITEM_UNCHECKED = "grocery_item_unchecked"
    GROCERY_QUANTITY_UPDATED = "grocery_quantity_updated"


class SearchMode(str, enum.Enum):
    """Result-cap modes for ingredient search"""

    LOOKUP = "lookup"
    BROWSE = "browse"


class Channel(str, enum.Enum):
    """Realtime broadcast channels"""

    NOTIFICATIONS = "notifications"
    GROCERY_LIST = "grocery_list"
