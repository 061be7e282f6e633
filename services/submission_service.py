"""Submission ledger service - dish submissions and their ingredient line items."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import EventType
from domain.models import Submission, SubmissionIngredient
from domain.schemas.submission_schemas import (
    LineItemInput,
    SubmissionCreate,
    SubmissionUpdate,
)
from repositories import (
    IngredientRepository,
    SubmissionRepository,
    SubmissionIngredientRepository,
)
from services.notification_service import Notifier
from services.phone import digits_only, eligible_tail, phone_matches, stored_tails

logger = logging.getLogger("potluck.submissions")


@dataclass
class LineItemDiff:
    """Operations that turn a current line item set into a desired one."""

    to_create: Dict[int, int] = field(default_factory=dict)
    to_update: Dict[int, int] = field(default_factory=dict)
    to_delete: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.to_create or self.to_update or self.to_delete)


def desired_quantities(items: List[LineItemInput]) -> Dict[int, int]:
    """ingredient_id -> quantity; the last occurrence of a repeated id wins."""
    return {item.ingredient_id: item.quantity for item in items}


def diff_line_items(current: Dict[int, int], desired: Dict[int, int]) -> LineItemDiff:
    """
    Compare ingredient_id -> quantity maps.

    Ids only in ``desired`` are created, ids only in ``current`` are deleted,
    ids in both with a different quantity are updated; the rest are untouched.
    """
    diff = LineItemDiff()
    for ingredient_id, quantity in desired.items():
        if ingredient_id not in current:
            diff.to_create[ingredient_id] = quantity
        elif current[ingredient_id] != quantity:
            diff.to_update[ingredient_id] = quantity
    diff.to_delete = [iid for iid in current if iid not in desired]
    return diff


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def _members_label(submission: Submission) -> str:
    return ", ".join(submission.member_list) or "Unknown"


def change_summary(added: int, removed: int) -> str:
    parts = []
    if added > 0:
        parts.append(f"{_plural(added, 'item')} added")
    if removed > 0:
        parts.append(f"{_plural(removed, 'item')} removed")
    return ", ".join(parts) if parts else "Details updated"


def _emit(notifier: Optional[Notifier], event_type: EventType, title: str, message: str):
    if notifier is not None:
        notifier.emit(event_type.value, title, message)


class SubmissionService:
    """Business logic for the submission ledger."""

    @staticmethod
    def get_submission(db: Session, submission_id: int) -> Submission:
        submission = SubmissionRepository(db).get_by_id(submission_id)
        if not submission:
            raise NotFoundError(f"Submission {submission_id} not found")
        return submission

    @staticmethod
    def list_submissions(db: Session) -> List[Submission]:
        """All submissions, most recent first."""
        return SubmissionRepository(db).get_all_recent_first()

    @staticmethod
    def _require_ingredients(db: Session, ingredient_ids):
        found = IngredientRepository(db).get_many(ingredient_ids)
        missing = sorted(set(ingredient_ids) - set(found))
        if missing:
            raise NotFoundError(
                f"Ingredient {missing[0]} not found",
                details={"missing_ingredient_ids": missing},
            )
        return found

    @staticmethod
    def ensure_phone_available(
        db: Session, phone_number: Optional[str], exclude_id: Optional[int] = None
    ) -> None:
        """
        Reject a phone number whose tail is already used by another submission.

        Only enforced when ``settings.enforce_unique_phone`` is enabled.
        """
        if not settings.enforce_unique_phone or not phone_number:
            return
        wanted = stored_tails(phone_number)
        if not wanted:
            return
        for other in SubmissionRepository(db).get_with_phone():
            if other.id == exclude_id:
                continue
            for tail in wanted:
                if phone_matches(other.phone_number, tail):
                    raise ServiceValidationError(
                        f"Phone number ending in {tail} is already used by another submission",
                        details={"phone_number": phone_number, "submission_id": other.id},
                        code="phone_taken",
                    )

    @staticmethod
    def create_submission(
        db: Session, payload: SubmissionCreate, notifier: Optional[Notifier] = None
    ) -> Submission:
        """
        Create a submission and its line items atomically.

        Repeated ingredient ids are merged by summing their quantities.
        """
        SubmissionService.ensure_phone_available(db, payload.phone_number)

        quantities: Dict[int, int] = {}
        for item in payload.ingredients:
            quantities[item.ingredient_id] = quantities.get(item.ingredient_id, 0) + item.quantity

        try:
            ingredients = SubmissionService._require_ingredients(db, quantities)
            submission = Submission(**payload.model_dump(exclude={"ingredients"}))
            for ingredient_id, quantity in quantities.items():
                submission.line_items.append(
                    SubmissionIngredient(
                        ingredient=ingredients[ingredient_id], quantity=quantity
                    )
                )
            db.add(submission)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            "Submission created: id=%s dish=%r items=%d",
            submission.id,
            submission.dish_name,
            len(quantities),
        )
        count = len(quantities)
        _emit(
            notifier,
            EventType.NEW_SUBMISSION,
            f"SUBMISSION — {submission.dish_name}",
            f"by {_members_label(submission)} · {_plural(count, 'ingredient')}",
        )
        return SubmissionService.get_submission(db, submission.id)

    @staticmethod
    def update_submission(
        db: Session,
        submission_id: int,
        payload: SubmissionUpdate,
        notifier: Optional[Notifier] = None,
        is_organizer: bool = False,
    ) -> Submission:
        """
        Full reconciling update.

        Scalar fields present in the payload are written; when ``ingredients``
        is present the line items are diffed against it and created, updated
        or deleted. Everything happens in one transaction: any failure (for
        example an unknown ingredient id) rolls the submission back to its
        prior state and re-raises.
        """
        submission = SubmissionService.get_submission(db, submission_id)
        fields = payload.model_dump(exclude_unset=True, exclude={"ingredients"})
        if fields.get("members", []) is None:
            fields.pop("members")
        if "dish_name" in fields and fields["dish_name"] is None:
            fields.pop("dish_name")
        if "phone_number" in fields:
            SubmissionService.ensure_phone_available(
                db, fields["phone_number"], exclude_id=submission.id
            )

        diff = LineItemDiff()
        try:
            for key, value in fields.items():
                setattr(submission, key, value)

            if payload.ingredients is not None:
                current_items = {item.ingredient_id: item for item in submission.line_items}
                diff = diff_line_items(
                    {iid: item.quantity for iid, item in current_items.items()},
                    desired_quantities(payload.ingredients),
                )
                new_ingredients = SubmissionService._require_ingredients(db, diff.to_create)

                for ingredient_id in diff.to_delete:
                    submission.line_items.remove(current_items[ingredient_id])
                for ingredient_id, quantity in diff.to_update.items():
                    current_items[ingredient_id].quantity = quantity
                for ingredient_id, quantity in diff.to_create.items():
                    submission.line_items.append(
                        SubmissionIngredient(
                            ingredient=new_ingredients[ingredient_id], quantity=quantity
                        )
                    )
            db.commit()
        except Exception:
            db.rollback()
            logger.warning("Submission %s update rolled back", submission_id, exc_info=True)
            raise

        added, removed = len(diff.to_create), len(diff.to_delete)
        logger.info(
            "Submission updated: id=%s added=%d updated=%d removed=%d",
            submission_id,
            added,
            len(diff.to_update),
            removed,
        )
        if is_organizer:
            editor, event_type = "Organizer", EventType.SUBMISSION_UPDATED_ORGANIZER
        else:
            members = submission.member_list
            editor = members[0] if members and members[0] else "User"
            event_type = EventType.SUBMISSION_UPDATED_USER
        _emit(
            notifier,
            event_type,
            f"EDIT — {submission.dish_name}",
            f"by {editor} · {change_summary(added, removed)}",
        )
        return SubmissionService.get_submission(db, submission_id)

    @staticmethod
    def delete_submission(
        db: Session, submission_id: int, notifier: Optional[Notifier] = None
    ) -> None:
        """Delete a submission; its line items go with it."""
        submission = SubmissionService.get_submission(db, submission_id)
        dish, members = submission.dish_name, _members_label(submission)
        try:
            db.delete(submission)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Submission deleted: id=%s", submission_id)
        _emit(notifier, EventType.SUBMISSION_DELETED, f"DELETION — {dish}", f"by {members}")

    @staticmethod
    def increment_line_item(
        db: Session, submission: Submission, ingredient_id: int, quantity: int
    ) -> SubmissionIngredient:
        """
        Add ``quantity`` of an ingredient to a submission without committing.

        An existing line item is incremented rather than duplicated.
        """
        repo = SubmissionIngredientRepository(db)
        line_item = repo.get_for_pair(submission.id, ingredient_id)
        if line_item is None:
            line_item = SubmissionIngredient(
                submission_id=submission.id, ingredient_id=ingredient_id, quantity=quantity
            )
            repo.add(line_item)
        else:
            line_item.quantity = line_item.quantity + quantity
            db.flush()
        return line_item

    @staticmethod
    def add_ingredient(
        db: Session,
        submission_id: int,
        ingredient_id: int,
        quantity: Optional[int] = None,
        notifier: Optional[Notifier] = None,
    ) -> Submission:
        """Add one ingredient; missing or sub-1 quantities add a single unit."""
        submission = SubmissionService.get_submission(db, submission_id)
        ingredient = SubmissionService._require_ingredients(db, [ingredient_id])[ingredient_id]
        amount = quantity if quantity is not None and quantity >= 1 else 1
        try:
            SubmissionService.increment_line_item(db, submission, ingredient_id, amount)
            db.commit()
        except Exception:
            db.rollback()
            raise
        _emit(
            notifier,
            EventType.INGREDIENT_ADDED,
            f"EDIT — {submission.dish_name}",
            f"1 item added · {ingredient.name}",
        )
        db.expire(submission)
        return SubmissionService.get_submission(db, submission_id)

    @staticmethod
    def update_ingredient_quantity(
        db: Session,
        submission_id: int,
        ingredient_id: int,
        quantity: int,
        notifier: Optional[Notifier] = None,
    ) -> Submission:
        """Set one line item's quantity; 0 or below deletes the line item."""
        submission = SubmissionService.get_submission(db, submission_id)
        ingredient = SubmissionService._require_ingredients(db, [ingredient_id])[ingredient_id]
        repo = SubmissionIngredientRepository(db)
        line_item = repo.get_for_pair(submission_id, ingredient_id)
        if line_item is None:
            raise NotFoundError(
                f"Ingredient {ingredient_id} is not part of submission {submission_id}"
            )

        removed = quantity < 1
        try:
            if removed:
                repo.remove(line_item)
            else:
                line_item.quantity = quantity
            db.commit()
        except Exception:
            db.rollback()
            raise

        if removed:
            _emit(
                notifier,
                EventType.INGREDIENT_REMOVED,
                f"EDIT — {submission.dish_name}",
                f"1 item removed · {ingredient.name}",
            )
        else:
            _emit(
                notifier,
                EventType.INGREDIENT_UPDATED,
                f"EDIT — {submission.dish_name}",
                f"Qty updated · {ingredient.name}",
            )
        db.expire(submission)
        return SubmissionService.get_submission(db, submission_id)

    @staticmethod
    def lookup_by_phone(db: Session, raw_phone: Optional[str]) -> Submission:
        """
        Find the submission whose stored phone tail equals the input's tail.

        Raises ServiceValidationError when the input has too few digits and
        NotFoundError when nothing matches.
        """
        digits = digits_only(raw_phone)
        tail = eligible_tail(raw_phone)
        if not tail:
            raise ServiceValidationError(
                "Phone required",
                details={"digits": len(digits), "minimum": settings.phone_min_digits},
            )
        for submission in SubmissionRepository(db).get_with_phone():
            if phone_matches(submission.phone_number, tail):
                logger.info("Phone lookup matched submission %s", submission.id)
                return submission
        raise NotFoundError("No submission found for that phone number")

    @staticmethod
    def get_or_create_organizer_bucket(db: Session) -> Submission:
        """
        The reserved submission that holds organizer ad-hoc grocery items.

        Created once under a fixed id. A concurrent first use loses the
        primary-key race, rolls back and reads the winner's row.
        """
        bucket_id = settings.organizer_submission_id
        repo = SubmissionRepository(db)
        bucket = repo.get_by_id(bucket_id)
        if bucket is not None:
            return bucket
        try:
            db.add(
                Submission(
                    id=bucket_id,
                    team_name=settings.organizer_team_name,
                    dish_name=settings.organizer_dish_name,
                    members=[],
                )
            )
            db.commit()
            logger.info("Created organizer submission bucket id=%s", bucket_id)
        except IntegrityError:
            db.rollback()
            logger.warning("Organizer bucket already created concurrently; reusing it")
        bucket = repo.get_by_id(bucket_id)
        if bucket is None:
            raise NotFoundError(f"Submission {bucket_id} not found")
        return bucket
