from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# menu cycle used when a caller names no month/year
DEFAULT_MONTH = "July"
DEFAULT_YEAR = 2025

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

# chronological order within a day; anything else sorts after these
MEAL_TYPES: tuple[str, ...] = ("breakfast", "lunch", "snacks", "dinner")


def normalize(value: str) -> str:
    return value.strip().lower()


def day_rank(day: str) -> int:
    try:
        return WEEKDAYS.index(day)
    except ValueError:
        return len(WEEKDAYS)


def meal_rank(meal_type: str) -> int:
    try:
        return MEAL_TYPES.index(meal_type)
    except ValueError:
        return len(MEAL_TYPES)


class MenuItems(BaseModel):
    regular: list[str] = Field(default_factory=list)
    extras: list[str] = Field(default_factory=list)
    special: list[str] = Field(default_factory=list)


class MenuSlot(BaseModel):
    """Natural identity of a menu slot: (hall, day, meal type, month, year)."""

    hall_name: str
    day: str
    meal_type: str
    month: str
    year: int

    @field_validator("day", "meal_type")
    @classmethod
    def _lower(cls, v: str) -> str:
        return normalize(v)

    def as_filter(self) -> dict[str, str | int]:
        return self.model_dump()
