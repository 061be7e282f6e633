"""
Shared test fixtures and utilities for the Potluck test suite.

Every test gets a fresh in-memory SQLite database with all tables created.
The FastAPI ``TestClient`` shares that session through a ``get_db``
dependency override, so service-level setup and HTTP calls see the same
data.
"""

import itertools
from typing import Dict, Generator, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from api.dependencies import get_broadcaster, get_db
from domain.models import Base, Ingredient, Submission
from domain.schemas.ingredient_schemas import DietaryFlags, IngredientImport
from domain.schemas.submission_schemas import LineItemInput, SubmissionCreate
from main import app
from services.ingredient_service import IngredientService
from services.organizer_service import OrganizerService
from services.submission_service import SubmissionService
from test_constants import CATALOG, ORGANIZER_PASSWORD, ORGANIZER_USERNAME


# =============================================================================
# Recording collaborators
# =============================================================================


class RecordingNotifier:
    """Stand-in for ``Notifier`` that remembers what services emitted."""

    def __init__(self):
        self.events: List[Tuple[str, str, Optional[str]]] = []
        self.published: List[Tuple[str, dict]] = []

    def emit(self, event_type, title, message=None):
        self.events.append((getattr(event_type, "value", event_type), title, message))

    def publish(self, channel, payload):
        self.published.append((getattr(channel, "value", channel), dict(payload)))

    @property
    def event_types(self) -> List[str]:
        return [event[0] for event in self.events]


class RecordingBroadcaster:
    """Stand-in for the websocket broadcaster used by route tests."""

    def __init__(self):
        self.messages: List[Tuple[str, dict]] = []

    def publish(self, channel, payload):
        self.messages.append((channel, payload))

    def on(self, channel: str) -> List[dict]:
        return [payload for name, payload in self.messages if name == channel]


class FailingBroadcaster:
    def publish(self, channel, payload):
        raise RuntimeError("socket hub is down")


# =============================================================================
# Database / client fixtures
# =============================================================================


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Database session on a private in-memory SQLite engine.

    Tables are created before the test and dropped afterwards, so each
    test starts from an empty database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture(scope="function")
def client(db_session, broadcaster) -> Generator[TestClient, None, None]:
    """TestClient whose routes use the test session and a recording broadcaster."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================


_product_ids = (f"T{n:04d}" for n in itertools.count(1))


def make_ingredient(db: Session, key: Optional[str] = None, **overrides) -> Ingredient:
    """
    Insert one catalog entry.

    ``key`` picks a realistic product from ``CATALOG``; keyword overrides
    replace individual fields.
    """
    data = dict(CATALOG[key]) if key else {"product_id": next(_product_ids), "name": "Test Item"}
    data.update(overrides)
    data["dietary"] = DietaryFlags(**(data.get("dietary") or {}))
    IngredientService.import_catalog(db, [IngredientImport(**data)])
    return _by_product_id(db, data["product_id"])


def _by_product_id(db: Session, product_id: str) -> Ingredient:
    return db.query(Ingredient).filter(Ingredient.product_id == product_id).one()


def make_catalog(db: Session, *keys: str) -> Dict[str, Ingredient]:
    """Insert several ``CATALOG`` products; returns them by key."""
    return {key: make_ingredient(db, key) for key in (keys or CATALOG.keys())}


def make_submission(
    db: Session,
    items: List[Tuple[Ingredient, int]] = (),
    notifier=None,
    **fields,
) -> Submission:
    """Create a submission through the service, as the POST route does."""
    fields.setdefault("dish_name", "Potluck Dish")
    payload = SubmissionCreate(
        ingredients=[
            LineItemInput(ingredient_id=ingredient.id, quantity=quantity)
            for ingredient, quantity in items
        ],
        **fields,
    )
    return SubmissionService.create_submission(db, payload, notifier)


def line_items_of(db: Session, submission_id: int) -> Dict[int, int]:
    """ingredient_id -> quantity as currently stored."""
    db.expire_all()
    submission = SubmissionService.get_submission(db, submission_id)
    return {item.ingredient_id: item.quantity for item in submission.line_items}


def organizer_headers(db: Session, username: str = ORGANIZER_USERNAME) -> Dict[str, str]:
    """Create (or reuse) an organizer, log in, and return bearer headers."""
    OrganizerService.ensure_organizer(db, username, ORGANIZER_PASSWORD)
    organizer = OrganizerService.authenticate(db, username, ORGANIZER_PASSWORD)
    return {"Authorization": f"Bearer {organizer.token}"}


API = "/api/v1"
