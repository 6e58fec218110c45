"""
core/menu_query.py
────────────────────────────────────────────────────────────────────────
Menu lookups and aggregation over the `meal_records` table.

Slot ordering
-------------
* ``chronological`` – Monday→Sunday, breakfast → lunch → snacks → dinner;
  unknown meal types follow the known ones alphabetically.
* ``lexical`` – plain string order on day then meal type (so
  ``breakfast < dinner < lunch``); kept for clients that relied on it.

Duplicates
----------
The table has no uniqueness constraint on (hall, day, meal type, month,
year).  Single-slot lookups return the earliest-inserted row (lowest id).
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, Literal, Mapping

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import case, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFound, StorageError, ValidationError
from core.models.menu import (
    DEFAULT_MONTH,
    DEFAULT_YEAR,
    MEAL_TYPES,
    WEEKDAYS,
    MenuItems,
    MenuSlot,
    day_rank,
    meal_rank,
    normalize,
)
from services.db import MealRecord
from services.seed_data import build_reference_menu

_LOG = logging.getLogger(__name__)

SlotOrder = Literal["chronological", "lexical"]

_UPDATABLE = ("hall_name", "day", "meal_type", "month", "year", "menu_items")
_SAMPLES_PER_HALL = 3


@contextmanager
def _storage_errors(op: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        _LOG.error("%s failed: %s", op, exc)
        raise StorageError(f"{op} failed: {exc}") from exc


def _clean_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Normalise + validate a (possibly partial) record payload."""
    out: dict[str, Any] = {}
    for key, value in fields.items():
        if key not in _UPDATABLE:
            raise ValidationError(f"Unknown field: {key}")
        if value is None:
            raise ValidationError(f"{key} must not be null")
        out[key] = value

    if "hall_name" in out:
        out["hall_name"] = str(out["hall_name"]).strip()
        if not out["hall_name"]:
            raise ValidationError("hallName must not be empty")
    if "day" in out:
        out["day"] = normalize(out["day"])
        if out["day"] not in WEEKDAYS:
            raise ValidationError(f"day must be one of {', '.join(WEEKDAYS)}")
    if "meal_type" in out:
        out["meal_type"] = normalize(out["meal_type"])
        if not out["meal_type"]:
            raise ValidationError("mealType must not be empty")
    if "year" in out:
        try:
            out["year"] = int(out["year"])
        except (TypeError, ValueError) as exc:
            raise ValidationError("year must be an integer") from exc
    if "month" in out:
        out["month"] = str(out["month"]).strip()
    if "menu_items" in out:
        try:
            out["menu_items"] = MenuItems.model_validate(out["menu_items"]).model_dump()
        except PydanticValidationError as exc:
            raise ValidationError(f"menuItems is malformed: {exc}") from exc
    return out


def _full_record(fields: Mapping[str, Any]) -> dict[str, Any]:
    """A complete record: slot keys required, cycle and items defaulted."""
    data = _clean_fields(fields)
    missing = [k for k in ("hall_name", "day", "meal_type") if k not in data]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    data.setdefault("month", DEFAULT_MONTH)
    data.setdefault("year", DEFAULT_YEAR)
    data.setdefault("menu_items", MenuItems().model_dump())
    return data


class MenuQueryService:
    def __init__(self, session: AsyncSession, slot_order: SlotOrder = "chronological"):
        self.session = session
        self.slot_order = slot_order

    # ───────────────────────── ordering ─────────────────────────
    def _slot_order_by(self) -> tuple[Any, ...]:
        if self.slot_order == "lexical":
            return (MealRecord.day, MealRecord.meal_type, MealRecord.id)

        day_key = case(
            {d: i for i, d in enumerate(WEEKDAYS)},
            value=MealRecord.day,
            else_=len(WEEKDAYS),
        )
        meal_key = case(
            {m: i for i, m in enumerate(MEAL_TYPES)},
            value=MealRecord.meal_type,
            else_=len(MEAL_TYPES),
        )
        return (day_key, MealRecord.day, meal_key, MealRecord.meal_type, MealRecord.id)

    # ───────────────────────── queries ──────────────────────────
    async def list_hall_menu(
        self, hall_name: str, month: str = DEFAULT_MONTH, year: int = DEFAULT_YEAR
    ) -> list[MealRecord]:
        _LOG.info("menus for hall=%s month=%s year=%s", hall_name, month, year)
        stmt = (
            select(MealRecord)
            .where(
                MealRecord.hall_name == hall_name,
                MealRecord.month == month,
                MealRecord.year == year,
            )
            .order_by(*self._slot_order_by())
        )
        with _storage_errors("list hall menu"):
            rows = list((await self.session.execute(stmt)).scalars().all())
        _LOG.info("found %d meals for hall=%s", len(rows), hall_name)
        return rows

    async def get_meal_slot(
        self,
        hall_name: str,
        day: str,
        meal_type: str,
        month: str = DEFAULT_MONTH,
        year: int = DEFAULT_YEAR,
    ) -> MealRecord:
        slot = MenuSlot(
            hall_name=hall_name, day=day, meal_type=meal_type, month=month, year=year
        )
        _LOG.info("menu slot %s", slot.as_filter())
        with _storage_errors("get meal slot"):
            row = await self._first_match(slot)
        if row is None:
            raise NotFound(f"No menu for {hall_name}/{slot.day}/{slot.meal_type}")
        return row

    async def list_all_halls(
        self, month: str = DEFAULT_MONTH, year: int = DEFAULT_YEAR
    ) -> dict[str, list[MealRecord]]:
        _LOG.info("menus for all halls month=%s year=%s", month, year)
        stmt = (
            select(MealRecord)
            .where(MealRecord.month == month, MealRecord.year == year)
            .order_by(MealRecord.hall_name, *self._slot_order_by())
        )
        with _storage_errors("list all halls"):
            rows = (await self.session.execute(stmt)).scalars().all()

        grouped: dict[str, list[MealRecord]] = {}
        for row in rows:
            grouped.setdefault(row.hall_name, []).append(row)
        _LOG.info("found %d meals across %d halls", len(rows), len(grouped))
        return grouped

    async def _first_match(self, slot: MenuSlot) -> MealRecord | None:
        stmt = (
            select(MealRecord)
            .filter_by(**slot.as_filter())
            .order_by(MealRecord.id)
            .limit(1)
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()

    # ───────────────────────── writes ───────────────────────────
    async def create_menu(self, fields: Mapping[str, Any]) -> MealRecord:
        row = MealRecord(**_full_record(fields))
        with _storage_errors("create menu"):
            self.session.add(row)
            await self.session.commit()
            await self.session.refresh(row)
        _LOG.info("added menu id=%s", row.id)
        return row

    async def update_menu(self, menu_id: int, fields: Mapping[str, Any]) -> MealRecord:
        # a missing id is NotFound whatever the payload looks like
        with _storage_errors("update menu"):
            row = await self.session.get(MealRecord, menu_id)
        if row is None:
            raise NotFound(f"Menu {menu_id} not found")

        data = _clean_fields(fields)
        if not data:
            raise ValidationError("No fields to update")

        with _storage_errors("update menu"):
            for key, value in data.items():
                setattr(row, key, value)
            await self.session.commit()
            await self.session.refresh(row)
        _LOG.info("updated menu id=%s fields=%s", menu_id, sorted(data))
        return row

    async def seed(self, month: str = DEFAULT_MONTH, year: int = DEFAULT_YEAR) -> dict[str, int]:
        """Upsert the reference dataset for one cycle."""
        counts = await self.upsert_records(build_reference_menu(month, year))
        _LOG.info("seeded month=%s year=%s %s", month, year, counts)
        return counts

    async def upsert_records(
        self, records: Iterable[Mapping[str, Any]]
    ) -> dict[str, int]:
        """
        Insert each record, or refresh `menu_items` on the first existing row
        with the same slot identity.  Running this twice leaves the row count
        unchanged.
        """
        cleaned = []
        for rec in records:
            data = _full_record(rec)
            cleaned.append((MenuSlot.model_validate(data), data))

        inserted = updated = 0
        with _storage_errors("seed"):
            for slot, data in cleaned:
                existing = await self._first_match(slot)
                if existing is None:
                    self.session.add(MealRecord(**data))
                    inserted += 1
                else:
                    existing.menu_items = data["menu_items"]
                    updated += 1
            await self.session.commit()
        return {"inserted": inserted, "updated": updated}

    # ───────────────────────── debug ────────────────────────────
    async def database_summary(self) -> dict[str, Any]:
        async def _distinct(col: Any) -> list[Any]:
            res = await self.session.execute(select(distinct(col)))
            return list(res.scalars().all())

        with _storage_errors("database summary"):
            total = (
                await self.session.execute(select(func.count()).select_from(MealRecord))
            ).scalar_one()
            halls = sorted(await _distinct(MealRecord.hall_name))
            days = sorted(await _distinct(MealRecord.day), key=lambda d: (day_rank(d), d))
            meal_types = sorted(
                await _distinct(MealRecord.meal_type), key=lambda m: (meal_rank(m), m)
            )
            months = sorted(await _distinct(MealRecord.month))
            years = sorted(await _distinct(MealRecord.year))

            samples: dict[str, list[MealRecord]] = {}
            for hall in halls:
                res = await self.session.execute(
                    select(MealRecord)
                    .where(MealRecord.hall_name == hall)
                    .order_by(MealRecord.id)
                    .limit(_SAMPLES_PER_HALL)
                )
                samples[hall] = list(res.scalars().all())

        _LOG.info("database holds %d meals across %d halls", total, len(halls))
        return {
            "database": {
                "total_meals": total,
                "halls": halls,
                "days": days,
                "meal_types": meal_types,
                "months": months,
                "years": years,
            },
            "sample_data": samples,
            "timestamp": datetime.now(timezone.utc),
        }
