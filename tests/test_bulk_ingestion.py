"""Tests for month-batch reconciliation."""

from datetime import date

import pytest

from mealboard.core.exceptions import AuthenticationError, ValidationError
from mealboard.models.base.enums import MealSlot, MenuStatus
from mealboard.schemas.menu.bulk_upload import BulkMenuUpload
from mealboard.schemas.menu.menu import MenuCreate, MenuListFilter

AUTHOR = "admin-1"


def _batch(menus, city="X", year=2026, month=3):
    return BulkMenuUpload(city_id=city, year=year, month=month, menus=menus)


def test_reconcile_creates_menus_and_reports_new_foods(ingestion, menus):
    batch = _batch([
        {
            "day": 1,
            "breakfast": {"items": ["Tea", "Bread"], "calories": 300},
            "dinner": {"items": ["Soup"], "calories": 200},
        }
    ])

    report = ingestion.reconcile(batch, AUTHOR)

    assert report.created == 2
    assert report.skipped == 0
    assert report.errors == []
    assert report.new_foods == ["Tea", "Bread", "Soup"]

    listed = menus.list_menus(MenuListFilter(city_id="X", year=2026, month=3))
    assert {(m.meal_slot, m.total_calories) for m in listed.items} == {
        (MealSlot.BREAKFAST, 300),
        (MealSlot.DINNER, 200),
    }
    assert all(m.status is MenuStatus.DRAFT for m in listed.items)


def test_reconcile_twice_skips_everything(ingestion):
    batch = _batch([
        {
            "day": 1,
            "breakfast": {"items": ["Tea", "Bread"], "calories": 300},
            "dinner": {"items": ["Soup"], "calories": 200},
        }
    ])
    ingestion.reconcile(batch, AUTHOR)

    report = ingestion.reconcile(batch, AUTHOR)

    assert report.created == 0
    assert report.skipped == 2
    assert report.errors == []
    assert report.new_foods == []


def test_reconcile_skips_published_slots_without_touching_them(ingestion, menus):
    existing = menus.create(
        MenuCreate(city_id="X", menu_date=date(2026, 3, 1), meal_slot="breakfast", items=["Idli"]),
        AUTHOR,
    )
    menus.publish(existing.id)

    report = ingestion.reconcile(
        _batch([{"day": 1, "breakfast": {"items": ["Tea"], "calories": 100}}]),
        AUTHOR,
    )

    assert (report.created, report.skipped) == (0, 1)
    assert menus.get(existing.id).items == ["Idli"]


def test_one_bad_day_does_not_abort_the_batch(ingestion):
    entries = []
    for day in range(1, 11):
        items = "Tea" if day == 5 else ["Tea", f"Dish {day}"]
        entries.append({"day": day, "breakfast": {"items": items, "calories": 150}})

    report = ingestion.reconcile(_batch(entries), AUTHOR)

    assert report.created == 9
    assert report.skipped == 0
    assert len(report.errors) == 1
    assert report.errors[0].startswith("2026-03-05 breakfast:")


def test_impossible_date_is_reported_per_meal(ingestion):
    batch = _batch(
        [
            {"day": 28, "breakfast": {"items": ["Tea"]}},
            {"day": 30, "breakfast": {"items": ["Tea"]}, "dinner": {"items": ["Soup"]}},
        ],
        month=2,
    )

    report = ingestion.reconcile(batch, AUTHOR)

    assert report.created == 1
    assert len(report.errors) == 2
    assert report.errors[0].startswith("day 30 breakfast:")
    assert report.errors[1].startswith("day 30 dinner:")


def test_meals_without_items_are_not_present(ingestion):
    batch = _batch([
        {"day": 1, "breakfast": {"items": []}, "dinner": None},
        {"day": 2, "breakfast": {"calories": 100}, "dinner": {"items": ["Soup"]}},
    ])

    report = ingestion.reconcile(batch, AUTHOR)

    assert (report.created, report.skipped, report.errors) == (1, 0, [])
    assert report.new_foods == ["Soup"]


def test_missing_calories_default_to_zero(ingestion, menus):
    ingestion.reconcile(_batch([{"day": 4, "dinner": {"items": ["Khichdi"]}}]), AUTHOR)

    listed = menus.list_menus(MenuListFilter(city_id="X"))

    assert [m.total_calories for m in listed.items] == [0]


def test_malformed_entry_is_reported(ingestion):
    report = ingestion.reconcile(
        _batch([{"day": "first", "breakfast": {"items": ["Tea"]}}, {"day": 2, "breakfast": {"items": ["Tea"]}}]),
        AUTHOR,
    )

    assert report.created == 1
    assert report.errors[0].startswith("day first:")


def test_reconcile_accepts_plain_dict(ingestion):
    report = ingestion.reconcile(
        {"city_id": "X", "year": 2026, "month": 3, "menus": [{"day": 1, "dinner": {"items": ["Soup"]}}]},
        AUTHOR,
    )

    assert report.created == 1


def test_reconcile_rejects_invalid_envelope(ingestion):
    with pytest.raises(ValidationError):
        ingestion.reconcile({"city_id": "X", "year": 2026, "month": 13, "menus": []}, AUTHOR)


def test_reconcile_requires_author(ingestion):
    with pytest.raises(AuthenticationError):
        ingestion.reconcile(_batch([]), None)
