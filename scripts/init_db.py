#!/usr/bin/env python3
"""
Standalone database initialization script.

Creates the schema and makes sure the bootstrap organizer account exists.
Safe to run repeatedly.
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect  # noqa: E402

from app.config import settings  # noqa: E402
from domain.models import SessionLocal, get_engine, init_database  # noqa: E402
from services.organizer_service import OrganizerService  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("potluck.init_db")


def init_schema() -> bool:
    try:
        init_database()
        tables = inspect(get_engine()).get_table_names()
        logger.info(f"Schema ready with {len(tables)} tables: {', '.join(sorted(tables))}")
        return True
    except Exception as e:
        logger.exception(f"Failed to initialize schema: {e}")
        return False


def ensure_default_organizer() -> bool:
    db = SessionLocal()
    try:
        organizer = OrganizerService.ensure_organizer(
            db,
            settings.default_organizer_username,
            settings.default_organizer_password,
        )
        logger.info(f"Organizer account ready: username={organizer.username}")
        if settings.is_production():
            logger.warning("Change the default organizer password before going live")
        return True
    except Exception as e:
        logger.exception(f"Failed to create organizer account: {e}")
        return False
    finally:
        db.close()


def main() -> int:
    if not init_schema():
        return 1
    if not ensure_default_organizer():
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
