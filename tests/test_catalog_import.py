"""
Tests for catalog import, the seed script's entry normalization and the
ingredient mappers that serialize catalog rows.
"""

import json

import pytest
from pydantic import ValidationError

from domain.mappers import IngredientMapper
from domain.models import Ingredient
from domain.schemas.ingredient_schemas import DietaryFlags, IngredientImport
from repositories import IngredientRepository
from scripts import seed_catalog
from services.ingredient_service import IngredientService
from test_constants import CATALOG
from test_fixtures import db_session, make_submission


def import_entries(db, *raw):
    return IngredientService.import_catalog(db, [seed_catalog.to_import(r) for r in raw])


# =============================================================================
# Upsert by product_id
# =============================================================================


def test_import_creates_then_updates_in_place(db_session):
    raw = {"product_id": "0004", "name": "Jasmine Rice", "aisle": "A1", "price_cents": 899}

    assert import_entries(db_session, raw) == {"created": 1, "updated": 0}
    original = db_session.query(Ingredient).one()

    assert import_entries(db_session, dict(raw, price_cents=949)) == {"created": 0, "updated": 1}

    db_session.expire_all()
    updated = db_session.query(Ingredient).one()
    assert updated.id == original.id
    assert updated.price_cents == 949


def test_reimport_keeps_line_item_references(db_session):
    import_entries(db_session, {"product_id": "0004", "name": "Jasmine Rice"})
    rice = db_session.query(Ingredient).one()
    submission = make_submission(db_session, [(rice, 2)])

    import_entries(db_session, {"product_id": "0004", "name": "Jasmine Rice (5 lb)"})

    db_session.expire_all()
    assert submission.line_items[0].ingredient.name == "Jasmine Rice (5 lb)"


def test_failed_import_rolls_back_batch(db_session, monkeypatch):
    entries = [
        IngredientImport(product_id="0001", name="Whole Milk"),
        IngredientImport(product_id="0002", name="Chocolate Milk"),
    ]
    real_add = IngredientRepository.add
    calls = []

    def add_then_fail(self, entity):
        calls.append(entity.product_id)
        if len(calls) == 2:
            raise RuntimeError("constraint violated")
        return real_add(self, entity)

    monkeypatch.setattr(IngredientRepository, "add", add_then_fail)

    with pytest.raises(RuntimeError):
        IngredientService.import_catalog(db_session, entries)
    assert db_session.query(Ingredient).count() == 0


# =============================================================================
# Seed script normalization
# =============================================================================


def test_to_import_converts_decimal_price_to_cents():
    entry = seed_catalog.to_import({"product_id": 4, "name": "Jasmine Rice", "price": 8.99})
    assert entry.product_id == "4"
    assert entry.price_cents == 899


def test_to_import_prefers_explicit_cents():
    entry = seed_catalog.to_import(
        {"product_id": "1", "name": "Salt", "price": 1.25, "price_cents": 99}
    )
    assert entry.price_cents == 99


def test_to_import_reads_flat_and_nested_dietary_flags():
    flat = seed_catalog.to_import(
        {"product_id": "1", "name": "Tofu", "vegan": True, "vegetarian": 1}
    )
    nested = seed_catalog.to_import(
        {"product_id": "2", "name": "Tofu", "dietary": {"vegan": True, "vegetarian": True}}
    )
    assert flat.dietary == nested.dietary
    assert flat.dietary.vegan is True
    assert flat.dietary.dairy is False


def test_to_import_rejects_missing_name():
    with pytest.raises(ValidationError):
        seed_catalog.to_import({"product_id": "1"})


def test_chunked_batches():
    assert list(seed_catalog.chunked(iter(range(5)), 2)) == [[0, 1], [2, 3], [4]]
    assert list(seed_catalog.chunked(iter([]), 3)) == []


def test_seed_streams_file_and_skips_invalid_entries(db_session, tmp_path, monkeypatch):
    entries = [dict(CATALOG[key], dietary=dict(CATALOG[key]["dietary"])) for key in ("milk", "rice")]
    entries.append({"product_id": "bad", "name": ""})
    entries.append({"product_id": "0009", "name": "Sea Salt", "price": 2.5, "gluten": False})
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(entries))
    monkeypatch.setattr(seed_catalog, "SessionLocal", lambda: db_session)

    totals = seed_catalog.seed(str(path), batch_size=2)

    assert totals == {"created": 3, "updated": 0, "skipped": 1}
    salt = db_session.query(Ingredient).filter(Ingredient.product_id == "0009").one()
    assert salt.price_cents == 250

    assert seed_catalog.seed(str(path), batch_size=10)["updated"] == 3


# =============================================================================
# Mappers
# =============================================================================


def test_mapper_variants_from_orm(db_session):
    import_entries(db_session, dict(CATALOG["milk"]))
    milk = db_session.query(Ingredient).one()

    grocery = IngredientMapper.to_grocery(milk)
    summary = IngredientMapper.to_summary(milk)
    full = IngredientMapper.to_response(milk)

    assert not hasattr(grocery, "dietary")
    assert summary.dietary == DietaryFlags(dairy=True, vegetarian=True, kosher=True)
    assert full.price == pytest.approx(4.29)
    assert full.category is None


def test_mapper_from_aggregation_row():
    row = {
        "ingredient_id": 7,
        "product_id": "0007",
        "name": "Yellow Onion",
        "aisle": "Produce",
        "price_cents": 379,
        "vegan": True,
    }

    summary = IngredientMapper.to_summary(row)

    assert summary.id == 7
    assert summary.dietary.vegan is True
    assert summary.dietary.gluten is False
    assert summary.size is None


def test_mapper_rejects_unknown_source():
    with pytest.raises(TypeError):
        IngredientMapper.to_grocery(42)
