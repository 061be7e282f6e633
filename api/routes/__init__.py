"""API routes package"""

from . import (
    health,
    ingredients,
    submissions,
    grocery_list,
    kitchen_resources,
    notifications,
    organizer_sessions,
    realtime,
)

__all__ = [
    "health",
    "ingredients",
    "submissions",
    "grocery_list",
    "kitchen_resources",
    "notifications",
    "organizer_sessions",
    "realtime",
]
