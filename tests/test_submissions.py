"""
Tests for the submission ledger.

Covers:
- create: merged duplicate ids, unknown ingredients, notifications
- full reconciling update: diffing, idempotence, atomic rollback
- incremental line item mutation and the no-zero-quantity invariant
- phone lookup and the optional uniqueness policy
- the reserved organizer bucket
"""

import pytest
from sqlalchemy.exc import IntegrityError

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Submission, SubmissionIngredient
from domain.schemas.submission_schemas import LineItemInput, SubmissionUpdate
from repositories import SubmissionRepository
from services.submission_service import (
    SubmissionService,
    change_summary,
    diff_line_items,
)
from test_constants import TEAMS
from test_fixtures import (
    RecordingNotifier,
    db_session,
    line_items_of,
    make_catalog,
    make_ingredient,
    make_submission,
)


def desired(*pairs):
    return [LineItemInput(ingredient_id=i, quantity=q) for i, q in pairs]


# =============================================================================
# Pure diff
# =============================================================================


def test_diff_classifies_create_update_delete():
    diff = diff_line_items({1: 2, 2: 1, 4: 5}, {1: 2, 3: 4, 4: 6})
    assert diff.to_create == {3: 4}
    assert diff.to_update == {4: 6}
    assert diff.to_delete == [2]


def test_diff_of_identical_sets_is_empty():
    assert diff_line_items({1: 2, 2: 1}, {1: 2, 2: 1}).is_empty


def test_change_summary_wording():
    assert change_summary(1, 0) == "1 item added"
    assert change_summary(2, 1) == "2 items added, 1 item removed"
    assert change_summary(0, 0) == "Details updated"


# =============================================================================
# Create
# =============================================================================


def test_create_submission_with_line_items(db_session):
    catalog = make_catalog(db_session, "rice", "beans")
    notifier = RecordingNotifier()

    submission = make_submission(
        db_session,
        [(catalog["rice"], 2), (catalog["beans"], 1)],
        notifier=notifier,
        **TEAMS["tacos"],
    )

    assert submission.id is not None
    assert line_items_of(db_session, submission.id) == {
        catalog["rice"].id: 2,
        catalog["beans"].id: 1,
    }
    assert notifier.events == [
        (
            "new_submission",
            "SUBMISSION — Carnitas Tacos",
            "by Ana Lopez, Diego Ramos · 2 ingredients",
        )
    ]


def test_create_merges_duplicate_ingredient_ids(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session, [(rice, 2), (rice, 3)])
    assert line_items_of(db_session, submission.id) == {rice.id: 5}


def test_create_with_unknown_ingredient_stores_nothing(db_session):
    rice = make_ingredient(db_session, "rice")
    ghost = type("Ghost", (), {"id": 999})()

    with pytest.raises(NotFoundError):
        make_submission(db_session, [(rice, 1), (ghost, 1)])

    assert db_session.query(Submission).count() == 0
    assert db_session.query(SubmissionIngredient).count() == 0


def test_members_default_to_empty_list(db_session):
    submission = make_submission(db_session, dish_name="Bread")
    assert submission.member_list == []


def test_list_is_most_recent_first(db_session):
    first = make_submission(db_session, dish_name="First")
    second = make_submission(db_session, dish_name="Second")
    ids = [s.id for s in SubmissionService.list_submissions(db_session)]
    assert ids == [second.id, first.id]


# =============================================================================
# Full reconciling update
# =============================================================================


def test_reconcile_adds_removes_and_leaves_unchanged(db_session):
    """[{1,2},{2,1}] -> [{1,2},{3,4}]: 2 deleted, 1 untouched, 3 created."""
    catalog = make_catalog(db_session, "rice", "beans", "onion")
    rice, beans, onion = catalog["rice"], catalog["beans"], catalog["onion"]
    submission = make_submission(db_session, [(rice, 2), (beans, 1)])
    rice_row = (
        db_session.query(SubmissionIngredient)
        .filter_by(submission_id=submission.id, ingredient_id=rice.id)
        .one()
    )
    rice_row_id, rice_updated_at = rice_row.id, rice_row.updated_at

    SubmissionService.update_submission(
        db_session,
        submission.id,
        SubmissionUpdate(ingredients=desired((rice.id, 2), (onion.id, 4))),
    )

    assert line_items_of(db_session, submission.id) == {rice.id: 2, onion.id: 4}
    rice_row = (
        db_session.query(SubmissionIngredient)
        .filter_by(submission_id=submission.id, ingredient_id=rice.id)
        .one()
    )
    assert rice_row.id == rice_row_id
    assert rice_row.updated_at == rice_updated_at


def test_reconcile_updates_changed_quantity(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session, [(rice, 2)])

    SubmissionService.update_submission(
        db_session, submission.id, SubmissionUpdate(ingredients=desired((rice.id, 7)))
    )
    assert line_items_of(db_session, submission.id) == {rice.id: 7}


def test_reconcile_last_occurrence_wins(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session, [(rice, 1)])

    SubmissionService.update_submission(
        db_session,
        submission.id,
        SubmissionUpdate(ingredients=desired((rice.id, 3), (rice.id, 9))),
    )
    assert line_items_of(db_session, submission.id) == {rice.id: 9}


def test_reconcile_is_idempotent(db_session):
    catalog = make_catalog(db_session, "rice", "beans")
    submission = make_submission(db_session, [(catalog["rice"], 1)])
    payload = SubmissionUpdate(
        ingredients=desired((catalog["rice"].id, 2), (catalog["beans"].id, 3))
    )

    SubmissionService.update_submission(db_session, submission.id, payload)
    rows_after_first = {
        (row.id, row.ingredient_id, row.quantity)
        for row in db_session.query(SubmissionIngredient).all()
    }
    notifier = RecordingNotifier()
    SubmissionService.update_submission(db_session, submission.id, payload, notifier)
    rows_after_second = {
        (row.id, row.ingredient_id, row.quantity)
        for row in db_session.query(SubmissionIngredient).all()
    }

    assert rows_after_first == rows_after_second
    assert notifier.events[0][2].endswith("Details updated")


def test_reconcile_with_unknown_ingredient_rolls_back_everything(db_session):
    catalog = make_catalog(db_session, "rice", "beans")
    submission = make_submission(
        db_session, [(catalog["rice"], 2), (catalog["beans"], 1)], dish_name="Original"
    )

    with pytest.raises(NotFoundError):
        SubmissionService.update_submission(
            db_session,
            submission.id,
            SubmissionUpdate(
                dish_name="Renamed",
                ingredients=desired((catalog["rice"].id, 5), (999, 1)),
            ),
        )

    db_session.expire_all()
    reloaded = SubmissionService.get_submission(db_session, submission.id)
    assert reloaded.dish_name == "Original"
    assert line_items_of(db_session, submission.id) == {
        catalog["rice"].id: 2,
        catalog["beans"].id: 1,
    }


def test_update_without_ingredients_keeps_line_items(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session, [(rice, 2)], notes="old")

    SubmissionService.update_submission(
        db_session, submission.id, SubmissionUpdate(notes="new", team_name="Renamed")
    )

    reloaded = SubmissionService.get_submission(db_session, submission.id)
    assert reloaded.notes == "new"
    assert reloaded.team_name == "Renamed"
    assert line_items_of(db_session, submission.id) == {rice.id: 2}


def test_update_only_writes_fields_present(db_session):
    submission = make_submission(db_session, notes="keep me", **TEAMS["curry"])
    SubmissionService.update_submission(
        db_session, submission.id, SubmissionUpdate(needs_fridge_space="yes")
    )
    reloaded = SubmissionService.get_submission(db_session, submission.id)
    assert reloaded.notes == "keep me"
    assert reloaded.members == ["Priya Shah"]
    assert reloaded.needs_fridge_space == "yes"


def test_update_with_empty_ingredient_list_removes_all(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session, [(rice, 2)])
    SubmissionService.update_submission(
        db_session, submission.id, SubmissionUpdate(ingredients=[])
    )
    assert line_items_of(db_session, submission.id) == {}


def test_update_notification_editor_label(db_session):
    catalog = make_catalog(db_session, "rice", "beans", "onion")
    submission = make_submission(
        db_session, [(catalog["rice"], 1), (catalog["beans"], 1)], **TEAMS["tacos"]
    )

    notifier = RecordingNotifier()
    SubmissionService.update_submission(
        db_session,
        submission.id,
        SubmissionUpdate(ingredients=desired((catalog["onion"].id, 1))),
        notifier,
        is_organizer=True,
    )
    SubmissionService.update_submission(
        db_session, submission.id, SubmissionUpdate(notes="extra lime"), notifier
    )

    assert notifier.events == [
        (
            "submission_updated_organizer",
            "EDIT — Carnitas Tacos",
            "by Organizer · 1 item added, 2 items removed",
        ),
        ("submission_updated_user", "EDIT — Carnitas Tacos", "by Ana Lopez · Details updated"),
    ]


def test_update_missing_submission(db_session):
    with pytest.raises(NotFoundError):
        SubmissionService.update_submission(db_session, 404, SubmissionUpdate(notes="x"))


def test_delete_removes_line_items(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session, [(rice, 2)], **TEAMS["tacos"])
    notifier = RecordingNotifier()

    SubmissionService.delete_submission(db_session, submission.id, notifier)

    assert db_session.query(Submission).count() == 0
    assert db_session.query(SubmissionIngredient).count() == 0
    assert notifier.events == [
        ("submission_deleted", "DELETION — Carnitas Tacos", "by Ana Lopez, Diego Ramos")
    ]


# =============================================================================
# Incremental line item mutation
# =============================================================================


def test_add_ingredient_creates_then_increments(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session)
    notifier = RecordingNotifier()

    SubmissionService.add_ingredient(db_session, submission.id, rice.id, None, notifier)
    assert line_items_of(db_session, submission.id) == {rice.id: 1}

    SubmissionService.add_ingredient(db_session, submission.id, rice.id, 3)
    assert line_items_of(db_session, submission.id) == {rice.id: 4}
    assert notifier.events[0][2] == "1 item added · Jasmine Rice"


@pytest.mark.parametrize("quantity", [0, -2])
def test_add_ingredient_quantity_has_minimum_of_one(db_session, quantity):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session)
    SubmissionService.add_ingredient(db_session, submission.id, rice.id, quantity)
    assert line_items_of(db_session, submission.id) == {rice.id: 1}


def test_add_unknown_ingredient(db_session):
    submission = make_submission(db_session)
    with pytest.raises(NotFoundError):
        SubmissionService.add_ingredient(db_session, submission.id, 999)


def test_set_quantity_updates_line_item(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session, [(rice, 2)])
    notifier = RecordingNotifier()

    SubmissionService.update_ingredient_quantity(db_session, submission.id, rice.id, 6, notifier)

    assert line_items_of(db_session, submission.id) == {rice.id: 6}
    assert notifier.event_types == ["ingredient_updated"]


@pytest.mark.parametrize("quantity", [0, -1])
def test_zero_or_negative_quantity_deletes_line_item(db_session, quantity):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session, [(rice, 2)])
    notifier = RecordingNotifier()

    SubmissionService.update_ingredient_quantity(
        db_session, submission.id, rice.id, quantity, notifier
    )

    assert line_items_of(db_session, submission.id) == {}
    assert db_session.query(SubmissionIngredient).filter(
        SubmissionIngredient.quantity <= 0
    ).count() == 0
    assert notifier.events == [
        ("ingredient_removed", "EDIT — Potluck Dish", "1 item removed · Jasmine Rice")
    ]


def test_set_quantity_for_absent_line_item(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session)
    with pytest.raises(NotFoundError):
        SubmissionService.update_ingredient_quantity(db_session, submission.id, rice.id, 2)


def test_database_rejects_non_positive_quantity(db_session):
    rice = make_ingredient(db_session, "rice")
    submission = make_submission(db_session)
    db_session.add(
        SubmissionIngredient(submission_id=submission.id, ingredient_id=rice.id, quantity=0)
    )
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


# =============================================================================
# Phone lookup
# =============================================================================


@pytest.mark.parametrize("lookup", ["2025550147", "12025550147", "(202) 555 0147"])
def test_lookup_by_phone_tail(db_session, lookup):
    submission = make_submission(db_session, **TEAMS["tacos"])
    assert SubmissionService.lookup_by_phone(db_session, lookup).id == submission.id


def test_lookup_matches_any_stored_number(db_session):
    submission = make_submission(db_session, **TEAMS["curry"])
    assert SubmissionService.lookup_by_phone(db_session, "4155550123").id == submission.id


def test_lookup_short_suffix_is_not_a_match(db_session):
    make_submission(db_session, **TEAMS["tacos"])
    with pytest.raises(NotFoundError):
        SubmissionService.lookup_by_phone(db_session, "5550147")


@pytest.mark.parametrize("raw", [None, "", "12345", "abc"])
def test_lookup_rejects_short_input(db_session, raw):
    with pytest.raises(ServiceValidationError):
        SubmissionService.lookup_by_phone(db_session, raw)


def test_unique_phone_policy(db_session, monkeypatch):
    monkeypatch.setattr(settings, "enforce_unique_phone", True)
    first = make_submission(db_session, **TEAMS["tacos"])

    with pytest.raises(ServiceValidationError) as exc:
        make_submission(db_session, dish_name="Salsa", phone_number="202-555-0147")
    assert "2025550147" in str(exc.value)

    # Editing a submission may keep its own number
    SubmissionService.update_submission(
        db_session, first.id, SubmissionUpdate(phone_number="+1 202 555 0147")
    )


def test_unique_phone_policy_off_by_default(db_session):
    make_submission(db_session, **TEAMS["tacos"])
    make_submission(db_session, dish_name="Salsa", phone_number="202-555-0147")
    assert db_session.query(Submission).count() == 2


# =============================================================================
# Organizer bucket
# =============================================================================


def test_organizer_bucket_is_created_once(db_session):
    first = SubmissionService.get_or_create_organizer_bucket(db_session)
    second = SubmissionService.get_or_create_organizer_bucket(db_session)

    assert first.id == second.id == settings.organizer_submission_id
    assert first.team_name == "Organizer"
    assert db_session.query(Submission).count() == 1


def test_organizer_bucket_race_reuses_existing_row(db_session, monkeypatch):
    # Another request created the bucket between our read and our insert
    db_session.add(
        Submission(id=settings.organizer_submission_id, team_name="Organizer", dish_name="x")
    )
    db_session.commit()
    db_session.expunge_all()

    real_get = SubmissionRepository.get_by_id
    calls = {"n": 0}

    def stale_first_read(self, submission_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_get(self, submission_id)

    monkeypatch.setattr(SubmissionRepository, "get_by_id", stale_first_read)

    bucket = SubmissionService.get_or_create_organizer_bucket(db_session)
    assert bucket.id == settings.organizer_submission_id
    assert db_session.query(Submission).count() == 1
