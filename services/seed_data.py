"""
Reference menu dataset used by `POST /menus/seed` and `scripts.seed_menus`.

Every hall runs the same weekly rotation, shifted by the hall's position in
`HALLS`, so Hall-1 gets the base week and Hall-3 starts one dish later.
"""
from __future__ import annotations

from typing import Any

from core.models.menu import WEEKDAYS

HALLS: tuple[str, ...] = ("Hall-1", "Hall-3", "Hall-4", "Hall-6", "Hall-12", "Hall-13")

# ─── weekly rotations (index = weekday, Monday first) ────────────────
_BREAKFAST: list[list[str]] = [
    ["Idli", "Sambar"],
    ["Upma", "Chutney"],
    ["Poha", "Jalebi"],
    ["Aloo Paratha", "Curd"],
    ["Masala Dosa", "Sambar"],
    ["Bread", "Butter", "Omelette"],
    ["Puri", "Aloo Sabzi"],
]
_LUNCH: list[list[str]] = [
    ["Rice", "Dal", "Aloo Gobi"],
    ["Roti", "Rajma", "Jeera Rice"],
    ["Rice", "Sambar", "Beans Poriyal"],
    ["Roti", "Chole", "Rice"],
    ["Veg Biryani", "Raita"],
    ["Roti", "Dal Makhani", "Rice"],
    ["Rice", "Kadhi", "Pakora"],
]
_DINNER: list[list[str]] = [
    ["Roti", "Mix Veg", "Dal Tadka"],
    ["Fried Rice", "Manchurian"],
    ["Roti", "Paneer Butter Masala", "Rice"],
    ["Khichdi", "Papad", "Pickle"],
    ["Roti", "Egg Curry", "Rice"],
    ["Pulao", "Dal Fry"],
    ["Roti", "Matar Paneer", "Rice"],
]
_LUNCH_EXTRAS = ["Curd", "Salad"]
_DINNER_EXTRAS = ["Papad"]
_SUNDAY_SPECIAL = ["Gulab Jamun"]


def _rotate(week: list[list[str]], hall_idx: int, day_idx: int) -> list[str]:
    return list(week[(hall_idx + day_idx) % len(week)])


def build_reference_menu(month: str, year: int) -> list[dict[str, Any]]:
    """Return one record per (hall, day, breakfast/lunch/dinner) for the cycle."""
    records: list[dict[str, Any]] = []
    for h, hall in enumerate(HALLS):
        for d, day in enumerate(WEEKDAYS):
            slots = {
                "breakfast": {"regular": _rotate(_BREAKFAST, h, d)},
                "lunch": {
                    "regular": _rotate(_LUNCH, h, d),
                    "extras": list(_LUNCH_EXTRAS),
                },
                "dinner": {
                    "regular": _rotate(_DINNER, h, d),
                    "extras": list(_DINNER_EXTRAS),
                },
            }
            if day == "sunday":
                slots["dinner"]["special"] = list(_SUNDAY_SPECIAL)

            for meal_type, items in slots.items():
                records.append(
                    {
                        "hall_name": hall,
                        "day": day,
                        "meal_type": meal_type,
                        "month": month,
                        "year": year,
                        "menu_items": {
                            "regular": items["regular"],
                            "extras": items.get("extras", []),
                            "special": items.get("special", []),
                        },
                    }
                )
    return records
