"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.ingredient_mapper import IngredientMapper, IngredientRecord
from domain.mappers.submission_mapper import SubmissionMapper

__all__ = ["IngredientMapper", "IngredientRecord", "SubmissionMapper"]
