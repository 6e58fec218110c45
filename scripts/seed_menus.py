"""
Seed the reference mess menu into the `meal_records` table.

Usage
-----

    # built-in weekly rotation for every hall, default cycle
    python -m scripts.seed_menus

    # another cycle
    python -m scripts.seed_menus --month August --year 2025

    # custom list of records (hallName / day / mealType / menuItems …)
    python -m scripts.seed_menus --file path/to/menus.json

Records are upserted by (hall, day, meal type, month, year), so re-running
never duplicates a slot.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from config import settings
from core.menu_query import MenuQueryService
from services.db import Database

_CAMEL_TO_FIELD = {
    "hallName": "hall_name",
    "mealType": "meal_type",
    "menuItems": "menu_items",
}


def _load_json(path: Path, month: str, year: int) -> list[dict[str, Any]]:
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError("JSON file must contain a list of menu records")
    records = []
    for raw in data:
        rec = {_CAMEL_TO_FIELD.get(k, k): v for k, v in raw.items()}
        rec.setdefault("month", month)
        rec.setdefault("year", year)
        records.append(rec)
    return records


async def _seed(month: str, year: int, file: Path | None) -> dict[str, int]:
    db = Database(settings.database_url, connect_timeout=settings.db_connect_timeout)
    try:
        async with db.session() as session:
            svc = MenuQueryService(session, slot_order=settings.slot_order)
            if file is not None:
                return await svc.upsert_records(_load_json(file, month, year))
            return await svc.seed(month, year)
    finally:
        await db.dispose()


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--month", default=settings.default_month)
    parser.add_argument("--year", type=int, default=settings.default_year)
    parser.add_argument(
        "--file",
        type=Path,
        help="optional JSON file with menu records to seed (overrides defaults)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    counts = asyncio.run(_seed(args.month, args.year, args.file))
    print(f"✓ inserted {counts['inserted']}, updated {counts['updated']} menu records")


if __name__ == "__main__":
    main()
