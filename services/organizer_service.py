"""Organizer accounts and opaque bearer-token sessions."""

import logging
import secrets
from typing import Optional

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ServiceValidationError, UnauthorizedError
from domain.models import Organizer
from repositories import OrganizerRepository

logger = logging.getLogger("potluck.organizer")

TOKEN_BYTES = 32


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


class OrganizerService:
    """Business logic for organizer authentication"""

    @staticmethod
    def create_organizer(db: Session, username: str, password: str) -> Organizer:
        repo = OrganizerRepository(db)
        if repo.get_by_username(username):
            raise ServiceValidationError(
                f"Organizer '{username}' already exists",
                details={"username": username},
            )
        try:
            organizer = repo.create(
                Organizer(username=username, password_hash=hash_password(password))
            )
        except IntegrityError:
            db.rollback()
            raise ServiceValidationError(
                f"Organizer '{username}' already exists",
                details={"username": username},
            )
        logger.info(f"organizer_created username={username}")
        return organizer

    @staticmethod
    def ensure_organizer(db: Session, username: str, password: str) -> Organizer:
        """Return the named organizer, creating it with ``password`` if missing."""
        existing = OrganizerRepository(db).get_by_username(username)
        return existing or OrganizerService.create_organizer(db, username, password)

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> Organizer:
        """
        Verify credentials and issue a fresh session token.

        Every successful login replaces the previous token, so only the most
        recent session for an organizer stays valid.
        """
        repo = OrganizerRepository(db)
        organizer = repo.get_by_username(username)
        if not organizer or not verify_password(password, organizer.password_hash):
            logger.warning(f"organizer_login_failed username={username}")
            raise UnauthorizedError("Invalid credentials")
        organizer.token = secrets.token_hex(TOKEN_BYTES)
        organizer = repo.update(organizer)
        logger.info(f"organizer_login username={username}")
        return organizer

    @staticmethod
    def resolve_token(db: Session, token: Optional[str]) -> Optional[Organizer]:
        return OrganizerRepository(db).get_by_token(token or "")

    @staticmethod
    def logout(db: Session, token: Optional[str]) -> None:
        """Invalidate the session for ``token``; unknown tokens are ignored."""
        organizer = OrganizerService.resolve_token(db, token)
        if organizer is None:
            return
        organizer.token = None
        OrganizerRepository(db).update(organizer)
        logger.info(f"organizer_logout username={organizer.username}")
