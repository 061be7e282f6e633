"""Grocery list service - demand aggregation and organizer overrides."""

import logging
import re
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.enums import Channel, EventType
from domain.mappers import IngredientMapper
from domain.models import GroceryCheckin
from domain.schemas.grocery_schemas import (
    GroceryItemResponse,
    GroceryItemUpdate,
    GroceryListResponse,
)
from repositories import GroceryAggregateRepository, GroceryCheckinRepository
from services.ingredient_service import IngredientService
from services.notification_service import Notifier
from services.submission_service import SubmissionService

logger = logging.getLogger("potluck.grocery")

OTHER_AISLE = "Other"
_AISLE_CODE = re.compile(r"[A-Za-z]\d+")


def aisle_label(aisle: Optional[str]) -> str:
    return aisle if aisle and aisle.strip() else OTHER_AISLE


def aisle_sort_key(label: str):
    """Aisle codes such as "A1" sort first, named aisles after; alphabetical within each tier."""
    return (0 if _AISLE_CODE.fullmatch(label) else 1, label)


def sort_aisles(labels: Iterable[str]) -> List[str]:
    return sorted(set(labels), key=aisle_sort_key)


def checkin_payload(checkin: GroceryCheckin) -> dict:
    """Raw override state as broadcast on the grocery_list channel."""
    return {
        "ingredient_id": checkin.ingredient_id,
        "checked": bool(checkin.checked),
        "checked_by": checkin.checked_by,
        "checked_at": checkin.checked_at.isoformat() if checkin.checked_at else None,
        "quantity_override": checkin.quantity_override,
    }


class GroceryListService:
    """Business logic for the aggregated shopping list."""

    @staticmethod
    def build(db: Session) -> GroceryListResponse:
        """
        Aggregate every submission's line items into an aisle-grouped list.

        Recomputed on every call. The effective ``total_quantity`` is the
        organizer's quantity override when one is stored, otherwise the
        aggregated demand; both are reported.
        """
        aggregates = GroceryAggregateRepository(db)
        teams = aggregates.teams_by_ingredient()

        grouped: Dict[str, List[GroceryItemResponse]] = {}
        total_cents = 0
        for row in aggregates.demand_with_overrides():
            ingredient = IngredientMapper.to_grocery(row)
            aggregated = int(row["aggregated_quantity"] or 0)
            override = row["quantity_override"]
            total_quantity = override if override is not None else aggregated
            line_total = ingredient.price_cents * total_quantity
            total_cents += line_total

            item = GroceryItemResponse(
                ingredient=ingredient,
                total_quantity=total_quantity,
                aggregated_quantity=aggregated,
                quantity_override=override,
                teams=sorted(teams.get(ingredient.id, ())),
                checked=bool(row["checked"]) if row["checked"] is not None else False,
                checked_by=row["checked_by"],
                checked_at=row["checked_at"],
                line_total_cents=line_total,
            )
            grouped.setdefault(aisle_label(ingredient.aisle), []).append(item)

        aisles = {}
        for label in sort_aisles(grouped):
            aisles[label] = sorted(
                grouped[label],
                key=lambda item: (item.ingredient.name.lower(), item.ingredient.id),
            )
        return GroceryListResponse(aisles=aisles, total_cents=total_cents)

    @staticmethod
    def _find_or_create_checkin(db: Session, ingredient_id: int) -> GroceryCheckin:
        """Existing override record, or a new unchecked one staged in the current transaction."""
        repo = GroceryCheckinRepository(db)
        checkin = repo.get_by_ingredient_id(ingredient_id)
        if checkin is None:
            checkin = repo.add(GroceryCheckin(ingredient_id=ingredient_id, checked=False))
        return checkin

    @staticmethod
    def _apply_changes(
        checkin: GroceryCheckin,
        checked: Optional[bool],
        quantity: Optional[int],
        organizer_name: Optional[str],
    ) -> bool:
        """Apply a partial update in place; returns the checked state before it."""
        was_checked = bool(checkin.checked)
        if checked is True and not was_checked:
            checkin.checked = True
            checkin.checked_by = organizer_name
            checkin.checked_at = datetime.now(timezone.utc)
        elif checked is False:
            checkin.checked = False
            checkin.checked_by = None
            checkin.checked_at = None
        if quantity is not None:
            checkin.quantity_override = quantity
        return was_checked

    @staticmethod
    def update_item(
        db: Session,
        ingredient_id: int,
        payload: GroceryItemUpdate,
        organizer_name: Optional[str] = None,
        notifier: Optional[Notifier] = None,
    ) -> GroceryCheckin:
        """
        Partial override update for one ingredient.

        Only fields present in ``payload`` change. ``checked_by`` and
        ``checked_at`` are stamped together when the item turns checked and
        cleared together when it turns unchecked; re-checking an already
        checked item keeps the original stamp.

        Find-or-create and the update commit as one transaction. Losing a
        concurrent first-insert race rolls back and retries once against the
        winner's record.
        """
        ingredient = IngredientService.get_ingredient(db, ingredient_id)
        changes = payload.model_dump(exclude_unset=True)
        checked = changes.get("checked")
        quantity = changes.get("quantity")

        for attempt in (1, 2):
            try:
                checkin = GroceryListService._find_or_create_checkin(db, ingredient_id)
                was_checked = GroceryListService._apply_changes(
                    checkin, checked, quantity, organizer_name
                )
                db.commit()
                break
            except IntegrityError:
                db.rollback()
                if attempt == 2:
                    raise
                logger.warning("Checkin for ingredient %s created concurrently; retrying", ingredient_id)
            except Exception:
                db.rollback()
                raise

        logger.info(
            "Grocery item %s updated: checked=%s override=%s",
            ingredient_id,
            checkin.checked,
            checkin.quantity_override,
        )
        if notifier is not None:
            notifier.publish(Channel.GROCERY_LIST, checkin_payload(checkin))
            who = organizer_name or "Organizer"
            if checked is True and not was_checked:
                notifier.emit(
                    EventType.GROCERY_ITEM_CHECKED.value,
                    f"CHECKED — {ingredient.name}",
                    f"by {who}",
                )
            elif checked is False and was_checked:
                notifier.emit(
                    EventType.GROCERY_ITEM_UNCHECKED.value,
                    f"UNCHECKED — {ingredient.name}",
                    f"by {who}",
                )
            if quantity is not None:
                notifier.emit(
                    EventType.GROCERY_QUANTITY_UPDATED.value,
                    f"QTY — {ingredient.name}",
                    f"Set to {quantity} by {who}",
                )
        return checkin

    @staticmethod
    def add_item(
        db: Session,
        ingredient_id: int,
        quantity: int = 1,
        organizer_name: Optional[str] = None,
        notifier: Optional[Notifier] = None,
    ) -> GroceryListResponse:
        """
        Add a catalog ingredient to the list without an originating submission.

        The line item lands on the reserved organizer bucket, so it flows
        through aggregation like any other demand.
        """
        ingredient = IngredientService.get_ingredient(db, ingredient_id)
        bucket = SubmissionService.get_or_create_organizer_bucket(db)
        amount = max(quantity or 1, 1)
        try:
            SubmissionService.increment_line_item(db, bucket, ingredient_id, amount)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.expire(bucket)

        logger.info("Organizer added %d x ingredient %s", amount, ingredient_id)
        if notifier is not None:
            notifier.emit(
                EventType.GROCERY_ITEM_ADDED.value,
                f"ADDED — {ingredient.name}",
                f"by {organizer_name or 'Organizer'} · qty {amount}",
            )
        return GroceryListService.build(db)
