"""
Submission Repository - Data access layer for dish submissions and line items
"""

from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from domain.models import Submission, SubmissionIngredient
from repositories.base import BaseRepository


class SubmissionRepository(BaseRepository[Submission]):
    """Repository for submission data access"""

    def __init__(self, db: Session):
        super().__init__(db, Submission)

    def _with_items(self):
        return self.db.query(Submission).options(
            selectinload(Submission.line_items).selectinload(
                SubmissionIngredient.ingredient
            )
        )

    def get_by_id(self, submission_id: int) -> Optional[Submission]:
        """Get submission with its line items and their ingredients loaded"""
        return self._with_items().filter(Submission.id == submission_id).first()

    def get_all_recent_first(self) -> List[Submission]:
        """All submissions, most recent first"""
        return (
            self._with_items()
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .all()
        )

    def get_with_phone(self) -> List[Submission]:
        """Submissions that carry any phone number, oldest first"""
        return (
            self._with_items()
            .filter(Submission.phone_number.isnot(None))
            .order_by(Submission.id)
            .all()
        )


class SubmissionIngredientRepository(BaseRepository[SubmissionIngredient]):
    """Repository for submission line items"""

    def __init__(self, db: Session):
        super().__init__(db, SubmissionIngredient)

    def get_for_pair(
        self, submission_id: int, ingredient_id: int
    ) -> Optional[SubmissionIngredient]:
        """Line item for a (submission, ingredient) pair, if any"""
        return (
            self.db.query(SubmissionIngredient)
            .filter(
                SubmissionIngredient.submission_id == submission_id,
                SubmissionIngredient.ingredient_id == ingredient_id,
            )
            .first()
        )
