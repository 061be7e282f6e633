"""
Tests for the organizer notification feed and the post-commit notifier.
"""

from app.config import settings
from domain.models import Notification, Submission
from services.notification_service import NotificationService, Notifier
from test_constants import TEAMS
from test_fixtures import (
    FailingBroadcaster,
    RecordingBroadcaster,
    db_session,
    make_ingredient,
    make_submission,
)


# =============================================================================
# Notifier
# =============================================================================


def test_emit_persists_and_broadcasts(db_session):
    hub = RecordingBroadcaster()
    notifier = Notifier(db_session, hub)

    notification = notifier.emit("new_submission", "SUBMISSION — Tacos", "by Ana")

    assert notification.id is not None
    assert notification.read is False
    [(channel, payload)] = hub.messages
    assert channel == "notifications"
    assert payload["type"] == "new_submission"
    assert payload["notification"]["id"] == notification.id
    assert payload["notification"]["title"] == "SUBMISSION — Tacos"


def test_broadcast_failure_never_reaches_caller(db_session):
    notifier = Notifier(db_session, FailingBroadcaster())

    notification = notifier.emit("new_submission", "SUBMISSION — Tacos")

    assert notification is not None
    assert db_session.query(Notification).count() == 1


def test_persistence_failure_never_reaches_caller(db_session, monkeypatch):
    hub = RecordingBroadcaster()

    def broken_create(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(NotificationService, "create", broken_create)

    assert Notifier(db_session, hub).emit("new_submission", "SUBMISSION — Tacos") is None
    assert hub.messages == []


def test_committed_write_survives_failing_notifier(db_session):
    rice = make_ingredient(db_session, "rice")
    notifier = Notifier(db_session, FailingBroadcaster())

    submission = make_submission(db_session, [(rice, 2)], notifier=notifier, **TEAMS["tacos"])

    assert db_session.get(Submission, submission.id) is not None
    assert [n.event_type for n in NotificationService.get_recent(db_session)] == ["new_submission"]


def test_publish_without_broadcaster_is_a_no_op(db_session):
    Notifier(db_session).publish("grocery_list", {"ingredient_id": 1})


# =============================================================================
# Feed
# =============================================================================


def test_feed_is_newest_first(db_session):
    for n in range(3):
        NotificationService.create(db_session, "new_submission", f"Dish {n}")

    titles = [n.title for n in NotificationService.get_recent(db_session)]

    assert titles == ["Dish 2", "Dish 1", "Dish 0"]


def test_feed_is_capped(db_session, monkeypatch):
    for n in range(5):
        NotificationService.create(db_session, "new_submission", f"Dish {n}")

    assert len(NotificationService.get_recent(db_session, limit=3)) == 3

    monkeypatch.setattr(settings, "notification_feed_limit", 2)
    assert [n.title for n in NotificationService.get_recent(db_session)] == ["Dish 4", "Dish 3"]


def test_mark_all_read(db_session):
    for n in range(3):
        NotificationService.create(db_session, "new_submission", f"Dish {n}")

    assert NotificationService.mark_all_read(db_session) == 3
    assert NotificationService.mark_all_read(db_session) == 0

    db_session.expire_all()
    assert all(n.read for n in NotificationService.get_recent(db_session))
