"""
Submission domain mappers.
Handles transformation between ORM models and DTOs for submissions.
"""

from domain.models import Submission
from domain.mappers.ingredient_mapper import IngredientMapper
from domain.schemas.submission_schemas import SubmissionResponse, LineItemResponse


class SubmissionMapper:
    """Mapper for submission transformations."""

    @staticmethod
    def to_response(submission: Submission) -> SubmissionResponse:
        """
        Convert a Submission ORM instance (line items loaded) to its DTO.

        ``members`` is always a list, even when the stored value is missing.
        """
        items = [
            LineItemResponse(
                ingredient=IngredientMapper.to_summary(item.ingredient),
                quantity=item.quantity,
            )
            for item in submission.line_items
        ]

        return SubmissionResponse(
            id=submission.id,
            team_name=submission.team_name,
            dish_name=submission.dish_name,
            notes=submission.notes,
            country_code=submission.country_code,
            members=submission.member_list,
            phone_number=submission.phone_number,
            has_cooking_place=submission.has_cooking_place,
            cooking_location=submission.cooking_location,
            found_all_ingredients=submission.found_all_ingredients,
            needs_utensils=submission.needs_utensils,
            needs_fridge_space=submission.needs_fridge_space,
            utensils_notes=submission.utensils_notes,
            other_ingredients=submission.other_ingredients,
            equipment_allocated=submission.equipment_allocated,
            helper_driver_needed=submission.helper_driver_needed,
            submitted_at=submission.created_at,
            ingredients=items,
        )
