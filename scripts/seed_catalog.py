#!/usr/bin/env python3
"""Idempotent grocery catalog seeder.

Usage examples:
  python scripts/seed_catalog.py --file data/catalog.json
  python scripts/seed_catalog.py --file data/catalog.json --database-url sqlite:///potluck.db

The input is a top-level JSON array of catalog entries. Each entry needs
``product_id`` and ``name``; ``size``, ``aisle``, ``category``, ``image_url``
and ``price_cents`` (or a decimal ``price``) are optional. Dietary flags may
be given either nested under ``dietary`` or flat on the entry.

Entries are streamed with ijson and upserted by ``product_id`` in batches,
so re-running the script updates products in place.
"""

import argparse
import logging
import os
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterator, List

import ijson
from pydantic import ValidationError
from tqdm import tqdm

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.models import DIETARY_FLAGS, SessionLocal, init_database, init_engine  # noqa: E402
from domain.schemas.ingredient_schemas import IngredientImport  # noqa: E402
from services.ingredient_service import IngredientService  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("potluck.seed_catalog")


def stream_entries(path: str) -> Iterator[Dict[str, Any]]:
    """Yield catalog objects from a JSON array without loading the whole file."""
    with open(path, "rb") as fh:
        for item in ijson.items(fh, "item"):
            yield item


def chunked(iterator: Iterator, size: int) -> Iterator[List]:
    batch = []
    for item in iterator:
        batch.append(item)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def to_import(raw: Dict[str, Any]) -> IngredientImport:
    """Normalize one raw entry; ijson yields Decimal for JSON numbers."""
    data = dict(raw)
    if data.get("price_cents") is None and data.get("price") is not None:
        data["price_cents"] = int((Decimal(str(data["price"])) * 100).to_integral_value())
    data.pop("price", None)
    if data.get("price_cents") is not None:
        data["price_cents"] = int(data["price_cents"])
    if data.get("product_id") is not None:
        data["product_id"] = str(data["product_id"])

    dietary = dict(data.pop("dietary", None) or {})
    for flag in DIETARY_FLAGS:
        if flag in data:
            dietary[flag] = data.pop(flag)
    data["dietary"] = {flag: bool(value) for flag, value in dietary.items()}
    return IngredientImport(**data)


def seed(file: str, batch_size: int = 500) -> Dict[str, int]:
    totals = {"created": 0, "updated": 0, "skipped": 0}
    db = SessionLocal()
    try:
        with tqdm(desc="Seeding catalog", unit="item") as progress:
            for batch in chunked(stream_entries(file), batch_size):
                entries = []
                for raw in batch:
                    try:
                        entries.append(to_import(raw))
                    except ValidationError as e:
                        totals["skipped"] += 1
                        logger.warning("Skipping invalid entry %r: %s", raw.get("product_id"), e)
                stats = IngredientService.import_catalog(db, entries)
                totals["created"] += stats["created"]
                totals["updated"] += stats["updated"]
                progress.update(len(batch))
    finally:
        db.close()
    return totals


def main():
    p = argparse.ArgumentParser(description="Seed the ingredient catalog (idempotent).")
    p.add_argument("--file", required=True, help="Path to a JSON array of catalog entries")
    p.add_argument(
        "--database-url",
        default=os.environ.get("DATABASE_URL"),
        help="SQLAlchemy URL; defaults to the application settings",
    )
    p.add_argument(
        "--batch-size",
        type=int,
        default=500,
        help="Number of entries per transaction batch",
    )
    args = p.parse_args()

    if not os.path.exists(args.file):
        logger.error("Data file not found: %s", args.file)
        sys.exit(2)

    try:
        init_engine(args.database_url)
        init_database()
        totals = seed(args.file, batch_size=args.batch_size)
        logger.info(
            "Seeding completed: %d created, %d updated, %d skipped",
            totals["created"],
            totals["updated"],
            totals["skipped"],
        )
    except Exception:
        logger.exception("Seeding failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
