# tests/test_seed_data.py
from __future__ import annotations

from collections import Counter

from core.models.menu import WEEKDAYS
from services.seed_data import HALLS, build_reference_menu

DATA = build_reference_menu("July", 2025)


def _slot(hall: str, day: str, meal: str) -> dict:
    return next(
        r for r in DATA
        if (r["hall_name"], r["day"], r["meal_type"]) == (hall, day, meal)
    )


def test_every_hall_has_a_full_week():
    assert len(DATA) == len(HALLS) * len(WEEKDAYS) * 3
    keys = Counter((r["hall_name"], r["day"], r["meal_type"]) for r in DATA)
    assert max(keys.values()) == 1


def test_reference_breakfast():
    assert _slot("Hall-1", "monday", "breakfast")["menu_items"] == {
        "regular": ["Idli", "Sambar"],
        "extras": [],
        "special": [],
    }


def test_halls_rotate_the_week():
    # Hall-3 on Monday eats what Hall-1 eats on Tuesday
    assert (
        _slot("Hall-3", "monday", "lunch")["menu_items"]["regular"]
        == _slot("Hall-1", "tuesday", "lunch")["menu_items"]["regular"]
    )


def test_sunday_dinner_special():
    for hall in HALLS:
        assert _slot(hall, "sunday", "dinner")["menu_items"]["special"] == ["Gulab Jamun"]
    assert _slot("Hall-1", "saturday", "dinner")["menu_items"]["special"] == []


def test_cycle_is_stamped_on_every_record():
    data = build_reference_menu("August", 2026)
    assert {(r["month"], r["year"]) for r in data} == {("August", 2026)}
