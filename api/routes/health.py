"""Health check and utility routes"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("potluck.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name}


@router.get("/health-check/db")
def database_health_check(db: Session = Depends(get_db)):
    """Round-trip a trivial query to the database."""
    try:
        db.execute(text("SELECT 1"))
        return {"database": "ok"}
    except Exception as e:
        logger.exception("Database health check failed")
        return {"database": "unavailable", "error": str(e)}
