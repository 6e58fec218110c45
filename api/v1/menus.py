# api/v1/menus.py
from __future__ import annotations
from typing import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.errors import NotFound, StorageError, ValidationError
from core.menu_query import MenuQueryService
from services.db import Database, get_session
from api.v1.schemas.menu import (
    DatabaseSummary,
    MenuCreate,
    MenuOut,
    MenuUpdate,
    SeedResult,
)

router = APIRouter()


def get_menu_service(db: AsyncSession = Depends(get_session)) -> MenuQueryService:
    return MenuQueryService(db, slot_order=settings.slot_order)


async def get_write_service(request: Request) -> AsyncGenerator[MenuQueryService, None]:
    """Service for /add and /update, where a storage failure is answered with 400."""
    db: Database = request.app.state.db
    try:
        await db.ensure_connected()
    except StorageError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    async with db.session() as session:
        yield MenuQueryService(session, slot_order=settings.slot_order)


def _cycle(month: str | None, year: int | None) -> tuple[str, int]:
    return (
        month or settings.default_month,
        year if year is not None else settings.default_year,
    )


# ───────────────────────── reads ────────────────────────────
@router.get(
    "/hall/{hall_name}",
    response_model=list[MenuOut],
    summary="List every meal slot for one hall",
)
async def list_hall_menu(
    hall_name: str,
    month: str | None = None,
    year: int | None = None,
    svc: MenuQueryService = Depends(get_menu_service),
) -> list[MenuOut]:
    month, year = _cycle(month, year)
    try:
        rows = await svc.list_hall_menu(hall_name, month, year)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=exc.message) from exc
    return [MenuOut.model_validate(r) for r in rows]


@router.get(
    "/hall/{hall_name}/{day}/{meal_type}",
    response_model=MenuOut,
    summary="Fetch one meal slot (day / meal type are case-insensitive)",
)
async def get_meal_slot(
    hall_name: str,
    day: str,
    meal_type: str,
    month: str | None = None,
    year: int | None = None,
    svc: MenuQueryService = Depends(get_menu_service),
) -> MenuOut:
    month, year = _cycle(month, year)
    try:
        row = await svc.get_meal_slot(hall_name, day, meal_type, month, year)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail="Menu not found") from exc
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=exc.message) from exc
    return MenuOut.model_validate(row)


@router.get(
    "/all-halls",
    response_model=dict[str, list[MenuOut]],
    summary="All halls' menus for a cycle, grouped by hall",
)
async def list_all_halls(
    month: str | None = None,
    year: int | None = None,
    svc: MenuQueryService = Depends(get_menu_service),
) -> dict[str, list[MenuOut]]:
    month, year = _cycle(month, year)
    try:
        grouped = await svc.list_all_halls(month, year)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=exc.message) from exc
    return {
        hall: [MenuOut.model_validate(r) for r in rows]
        for hall, rows in grouped.items()
    }


# ───────────────────────── writes ───────────────────────────
@router.post(
    "/add",
    response_model=MenuOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_menu(
    body: MenuCreate,
    svc: MenuQueryService = Depends(get_write_service),
) -> MenuOut:
    fields = body.model_dump(exclude_none=True)
    fields["month"], fields["year"] = _cycle(body.month, body.year)
    try:
        row = await svc.create_menu(fields)
    except (ValidationError, StorageError) as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    return MenuOut.model_validate(row)


@router.put("/update/{menu_id}", response_model=MenuOut)
async def update_menu(
    menu_id: int,
    body: MenuUpdate,
    svc: MenuQueryService = Depends(get_write_service),
) -> MenuOut:
    try:
        row = await svc.update_menu(menu_id, body.model_dump(exclude_unset=True))
    except NotFound as exc:
        raise HTTPException(status_code=404, detail="Menu not found") from exc
    except (ValidationError, StorageError) as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    return MenuOut.model_validate(row)


@router.post("/seed", response_model=SeedResult)
async def seed_menus(
    month: str | None = None,
    year: int | None = None,
    svc: MenuQueryService = Depends(get_menu_service),
) -> SeedResult:
    month, year = _cycle(month, year)
    try:
        counts = await svc.seed(month, year)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=exc.message) from exc
    return SeedResult(message="Menu data seeded successfully", **counts)


# ───────────────────────── debug ────────────────────────────
@router.get("/debug/database", response_model=DatabaseSummary)
async def debug_database(
    svc: MenuQueryService = Depends(get_menu_service),
) -> DatabaseSummary:
    try:
        summary = await svc.database_summary()
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=exc.message) from exc
    return DatabaseSummary.model_validate(summary)
