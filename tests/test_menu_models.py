# tests/test_menu_models.py
from core.models.menu import MenuItems, MenuSlot, day_rank, meal_rank


def test_slot_normalises_day_and_meal_type():
    slot = MenuSlot(hall_name="Hall-1", day=" Monday ", meal_type="BREAKFAST",
                    month="July", year=2025)
    assert slot.as_filter() == {
        "hall_name": "Hall-1",
        "day": "monday",
        "meal_type": "breakfast",
        "month": "July",
        "year": 2025,
    }


def test_hall_name_is_not_case_folded():
    slot = MenuSlot(hall_name="HALL-1", day="monday", meal_type="lunch",
                    month="July", year=2025)
    assert slot.hall_name == "HALL-1"


def test_menu_items_default_to_empty_lists():
    assert MenuItems.model_validate({"regular": ["Idli"]}).model_dump() == {
        "regular": ["Idli"],
        "extras": [],
        "special": [],
    }


def test_ranks():
    assert day_rank("monday") < day_rank("sunday") < day_rank("holiday")
    assert meal_rank("breakfast") < meal_rank("lunch") < meal_rank("dinner") < meal_rank("brunch")
