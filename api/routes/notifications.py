"""Organizer notification feed routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_db, require_organizer
from domain.models import Organizer
from domain.schemas.notification_schemas import NotificationResponse
from services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])
logger = logging.getLogger("potluck.api.notifications")


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    db: Session = Depends(get_db), organizer: Organizer = Depends(require_organizer)
):
    """Most recent notifications, newest first"""
    return [
        NotificationResponse.model_validate(n) for n in NotificationService.get_recent(db)
    ]


@router.patch("/mark_all_read")
def mark_all_notifications_read(
    db: Session = Depends(get_db), organizer: Organizer = Depends(require_organizer)
):
    NotificationService.mark_all_read(db)
    return {"ok": True}
