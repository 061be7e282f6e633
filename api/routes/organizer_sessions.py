"""Organizer session routes"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging
from typing import Optional

from api.dependencies import bearer_token, get_db
from domain.schemas.session_schemas import OrganizerLogin, OrganizerSessionResponse
from services.organizer_service import OrganizerService

router = APIRouter(prefix="/organizer_session", tags=["Organizer Session"])
logger = logging.getLogger("potluck.api.organizer_sessions")


@router.post("", response_model=OrganizerSessionResponse)
def create_organizer_session(payload: OrganizerLogin, db: Session = Depends(get_db)):
    """Log in and receive a fresh bearer token"""
    organizer = OrganizerService.authenticate(db, payload.username, payload.password)
    return OrganizerSessionResponse(token=organizer.token, username=organizer.username)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_organizer_session(
    token: Optional[str] = Depends(bearer_token), db: Session = Depends(get_db)
):
    OrganizerService.logout(db, token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
