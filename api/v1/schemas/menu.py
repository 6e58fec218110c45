from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.models.menu import MenuItems


class _CamelModel(BaseModel):
    """camelCase on the wire, snake_case (or camelCase) accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class MenuOut(_CamelModel):
    id: int
    hall_name: str
    day: str
    meal_type: str
    month: str
    year: int
    menu_items: MenuItems
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MenuCreate(_CamelModel):
    hall_name: str = Field(..., examples=["Hall-1"])
    day: str = Field(..., examples=["monday"])
    meal_type: str = Field(..., examples=["breakfast", "lunch", "dinner"])
    month: str | None = None          # falls back to the configured cycle
    year: int | None = None
    menu_items: MenuItems = Field(default_factory=MenuItems)


class MenuUpdate(_CamelModel):
    hall_name: str | None = None
    day: str | None = None
    meal_type: str | None = None
    month: str | None = None
    year: int | None = None
    menu_items: MenuItems | None = None

    model_config = ConfigDict(extra="forbid")


class SeedResult(BaseModel):
    message: str
    inserted: int
    updated: int


class DatabaseStats(_CamelModel):
    total_meals: int
    halls: list[str]
    days: list[str]
    meal_types: list[str]
    months: list[str]
    years: list[int]


class DatabaseSummary(_CamelModel):
    database: DatabaseStats
    sample_data: dict[str, list[MenuOut]]
    timestamp: datetime
