"""
API dependencies for dependency injection
"""

from typing import Generator, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from adapters import Broadcaster, broadcaster
from app.exceptions import UnauthorizedError
from domain.models import Organizer, get_db_session
from services.notification_service import Notifier
from services.organizer_service import OrganizerService


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_broadcaster() -> Broadcaster:
    return broadcaster


def get_notifier(
    db: Session = Depends(get_db),
    hub: Broadcaster = Depends(get_broadcaster),
) -> Notifier:
    """Post-commit notification collaborator bound to the request's session."""
    return Notifier(db, hub)


def bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_organizer(
    token: Optional[str] = Depends(bearer_token),
    db: Session = Depends(get_db),
) -> Optional[Organizer]:
    """Soft detection: the organizer behind the bearer token, or None."""
    if not token:
        return None
    return OrganizerService.resolve_token(db, token)


def require_organizer(
    organizer: Optional[Organizer] = Depends(get_current_organizer),
) -> Organizer:
    """Gate for privileged routes."""
    if organizer is None:
        raise UnauthorizedError("Organizer authentication required")
    return organizer
