"""Tests for menu authoring and publication."""

from datetime import date

import pytest

from mealboard.core.exceptions import (
    AlreadyPublishedError,
    AuthenticationError,
    DuplicateMenuError,
    MenuNotFoundError,
    MenuPublishedError,
    NothingToPublishError,
    ValidationError,
)
from mealboard.models.base.enums import MealSlot, MenuStatus
from mealboard.schemas.menu.menu import MenuCreate, MenuListFilter, MenuUpdate

AUTHOR = "admin-1"


def _create(menus, day=1, slot=MealSlot.BREAKFAST, city="pune", items=("Poha", "Tea"), calories=350):
    return menus.create(
        MenuCreate(
            city_id=city,
            menu_date=date(2026, 3, day),
            meal_slot=slot,
            items=list(items),
            total_calories=calories,
        ),
        AUTHOR,
    )


def test_create_stores_draft_and_catalogs_dishes(menus, catalog):
    menu = _create(menus)

    assert menu.status is MenuStatus.DRAFT
    assert menu.items == ["Poha", "Tea"]
    assert menu.created_by == AUTHOR
    assert menu.published_at is None
    assert catalog.missing_names(["Poha", "Tea"]) == []


def test_create_requires_author(menus):
    with pytest.raises(AuthenticationError):
        menus.create(
            MenuCreate(city_id="pune", menu_date=date(2026, 3, 1), meal_slot="breakfast", items=["Poha"]),
            None,
        )


def test_duplicate_slot_is_rejected_with_existing_id(menus):
    original = _create(menus)

    with pytest.raises(DuplicateMenuError) as exc_info:
        _create(menus, items=("Upma",))

    assert exc_info.value.existing_id == original.id
    assert menus.get(original.id).items == ["Poha", "Tea"]
    assert menus.list_menus(MenuListFilter(city_id="pune")).pagination.total == 1


def test_concurrent_create_loser_gets_duplicate_from_unique_constraint(menus, catalog, monkeypatch):
    # Both callers see an empty slot; only the store constraint can reject the second
    monkeypatch.setattr(menus.repository, "find_by_slot", lambda *args, **kwargs: None)
    _create(menus)

    with pytest.raises(DuplicateMenuError):
        _create(menus, items=("Upma",))

    listed = menus.list_menus(MenuListFilter(city_id="pune"))
    assert listed.pagination.total == 1
    assert listed.items[0].items == ["Poha", "Tea"]
    assert catalog.find_by_name("Upma") is None


def test_same_date_other_slot_or_city_is_allowed(menus):
    _create(menus)
    _create(menus, slot=MealSlot.DINNER)
    _create(menus, city="mumbai")

    assert menus.list_menus().pagination.total == 3


def test_update_draft_is_partial(menus):
    menu = _create(menus)

    updated = menus.update(menu.id, MenuUpdate(total_calories=420))

    assert updated.total_calories == 420
    assert updated.items == ["Poha", "Tea"]
    assert menus.get(menu.id).total_calories == 420


def test_update_replaces_items_and_catalogs_new_dishes(menus, catalog):
    menu = _create(menus)

    updated = menus.update(menu.id, MenuUpdate(items=["Upma", " Coffee "]))

    assert updated.items == ["Upma", "Coffee"]
    assert catalog.find_by_name("Coffee") is not None


def test_published_menu_cannot_be_updated(menus):
    menu = _create(menus)
    menus.publish(menu.id)

    with pytest.raises(MenuPublishedError):
        menus.update(menu.id, MenuUpdate(total_calories=1))

    assert menus.get(menu.id).total_calories == 350


def test_published_menu_cannot_be_deleted(menus):
    menu = _create(menus)
    menus.publish(menu.id)

    with pytest.raises(MenuPublishedError):
        menus.delete(menu.id)

    assert menus.get(menu.id).status is MenuStatus.PUBLISHED


def test_delete_draft(menus):
    menu = _create(menus)

    menus.delete(menu.id)

    with pytest.raises(MenuNotFoundError):
        menus.get(menu.id)


def test_publish_sets_timestamp_and_rejects_republish(menus):
    menu = _create(menus)

    published = menus.publish(menu.id)

    assert published.status is MenuStatus.PUBLISHED
    assert published.published_at is not None
    with pytest.raises(AlreadyPublishedError):
        menus.publish(menu.id)


@pytest.mark.parametrize("operation", ["publish", "delete", "get"])
def test_unknown_menu_is_not_found(menus, operation):
    with pytest.raises(MenuNotFoundError):
        getattr(menus, operation)("does-not-exist")


def test_publish_bulk_excludes_published_and_unknown_ids(menus):
    first = _create(menus, day=1)
    second = _create(menus, day=2)
    third = _create(menus, day=3)
    menus.publish(second.id)

    result = menus.publish_bulk([first.id, second.id, third.id, "missing"])

    assert sorted(result.published_ids) == sorted([first.id, third.id])
    assert result.published_count == 2
    assert result.requested == 4
    assert menus.get(third.id).status is MenuStatus.PUBLISHED


def test_publish_bulk_rejects_empty_list(menus):
    with pytest.raises(ValidationError):
        menus.publish_bulk([])


def test_publish_bulk_of_only_published_ids_is_empty_success(menus):
    menu = _create(menus)
    menus.publish(menu.id)

    result = menus.publish_bulk([menu.id])

    assert result.published_ids == []


def test_publish_month_only_touches_that_city_and_month(menus):
    march_breakfast = _create(menus, day=1)
    march_dinner = _create(menus, day=31, slot=MealSlot.DINNER)
    other_city = _create(menus, city="mumbai")
    april = menus.create(
        MenuCreate(city_id="pune", menu_date=date(2026, 4, 1), meal_slot="breakfast", items=["Idli"]),
        AUTHOR,
    )

    result = menus.publish_month("pune", 2026, 3)

    assert result.published_count == 2
    assert sorted(result.published_ids) == sorted([march_breakfast.id, march_dinner.id])
    assert menus.get(other_city.id).status is MenuStatus.DRAFT
    assert menus.get(april.id).status is MenuStatus.DRAFT


def test_publish_month_without_drafts_is_rejected(menus):
    menu = _create(menus)
    menus.publish(menu.id)

    with pytest.raises(NothingToPublishError):
        menus.publish_month("pune", 2026, 3)

    with pytest.raises(NothingToPublishError):
        menus.publish_month("pune", 2026, 5)


def test_list_menus_filters_and_orders(menus):
    _create(menus, day=1)
    _create(menus, day=2, slot=MealSlot.DINNER)
    _create(menus, day=2)
    latest = menus.publish(_create(menus, day=3).id)

    page = menus.list_menus(MenuListFilter(city_id="pune", year=2026, month=3))
    published = menus.list_menus(MenuListFilter(status=MenuStatus.PUBLISHED))

    assert [(m.menu_date.day, m.meal_slot) for m in page.items] == [
        (3, MealSlot.BREAKFAST),
        (2, MealSlot.BREAKFAST),
        (2, MealSlot.DINNER),
        (1, MealSlot.BREAKFAST),
    ]
    assert [m.id for m in published.items] == [latest.id]


def test_public_menus_only_show_published(menus):
    breakfast = _create(menus, day=5)
    _create(menus, day=5, slot=MealSlot.DINNER)
    menus.publish(breakfast.id)

    public = menus.public_menus("pune", on_date=date(2026, 3, 5))

    assert [m.id for m in public] == [breakfast.id]


def test_public_menus_require_city(menus):
    with pytest.raises(ValidationError):
        menus.public_menus("  ")


def test_monthly_menu_groups_published_meals_per_day(menus):
    breakfast = _create(menus, day=2, items=("Poha",), calories=300)
    dinner = _create(menus, day=2, slot=MealSlot.DINNER, items=("Dal", "Rice"), calories=600)
    _create(menus, day=3)
    menus.publish_bulk([breakfast.id, dinner.id])

    monthly = menus.monthly_menu("pune", 2026, 3)

    assert len(monthly.days) == 1
    day = monthly.days[0]
    assert day.date == date(2026, 3, 2)
    assert day.breakfast.items == ["Poha"]
    assert day.dinner.calories == 600
    assert (day.breakfast_id, day.dinner_id) == (breakfast.id, dinner.id)
