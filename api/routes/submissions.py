"""Submission ledger routes"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from api.dependencies import get_db, get_notifier, get_current_organizer, require_organizer
from domain.mappers import SubmissionMapper
from domain.models import Organizer
from domain.schemas.submission_schemas import (
    IngredientAddRequest,
    IngredientQuantityRequest,
    SubmissionCreate,
    SubmissionResponse,
    SubmissionUpdate,
)
from services.notification_service import Notifier
from services.submission_service import SubmissionService

router = APIRouter(prefix="/submissions", tags=["Submissions"])
logger = logging.getLogger("potluck.api.submissions")


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def create_submission(
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    """Create a dish submission with its ingredient line items"""
    submission = SubmissionService.create_submission(db, payload, notifier)
    return SubmissionMapper.to_response(submission)


@router.get("", response_model=List[SubmissionResponse])
def list_submissions(
    db: Session = Depends(get_db), organizer: Organizer = Depends(require_organizer)
):
    """All submissions, most recent first"""
    return [SubmissionMapper.to_response(s) for s in SubmissionService.list_submissions(db)]


@router.get("/lookup", response_model=SubmissionResponse)
def lookup_submission(
    phone: Optional[str] = Query(None, description="Raw phone number in any format"),
    db: Session = Depends(get_db),
):
    """Find a participant's own submission by phone number"""
    return SubmissionMapper.to_response(SubmissionService.lookup_by_phone(db, phone))


@router.get("/{submission_id}", response_model=SubmissionResponse)
def get_submission(
    submission_id: int,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    return SubmissionMapper.to_response(SubmissionService.get_submission(db, submission_id))


@router.patch("/{submission_id}", response_model=SubmissionResponse)
def update_submission(
    submission_id: int,
    payload: SubmissionUpdate,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    organizer: Optional[Organizer] = Depends(get_current_organizer),
):
    """
    Reconciling update.

    Organizers edit with their bearer token; participants reach their own
    submission through phone lookup and edit it anonymously.
    """
    submission = SubmissionService.update_submission(
        db, submission_id, payload, notifier, is_organizer=organizer is not None
    )
    return SubmissionMapper.to_response(submission)


@router.delete("/{submission_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_submission(
    submission_id: int,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    organizer: Organizer = Depends(require_organizer),
):
    SubmissionService.delete_submission(db, submission_id, notifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{submission_id}/ingredients", response_model=SubmissionResponse)
def add_submission_ingredient(
    submission_id: int,
    payload: IngredientAddRequest,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    organizer: Organizer = Depends(require_organizer),
):
    """Add one ingredient, incrementing an existing line item"""
    submission = SubmissionService.add_ingredient(
        db, submission_id, payload.ingredient_id, payload.quantity, notifier
    )
    return SubmissionMapper.to_response(submission)


@router.patch(
    "/{submission_id}/ingredients/{ingredient_id}", response_model=SubmissionResponse
)
def update_submission_ingredient(
    submission_id: int,
    ingredient_id: int,
    payload: IngredientQuantityRequest,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    organizer: Organizer = Depends(require_organizer),
):
    """Set one line item's quantity; 0 or below removes it"""
    submission = SubmissionService.update_ingredient_quantity(
        db, submission_id, ingredient_id, payload.quantity, notifier
    )
    return SubmissionMapper.to_response(submission)
