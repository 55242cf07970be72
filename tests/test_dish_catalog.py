"""Tests for dish creation and statistics."""

import pytest

from mealboard.core.exceptions import DishNotFoundError
from mealboard.schemas.menu.dish import DishListFilter


def test_ensure_exists_is_idempotent(catalog):
    first = catalog.ensure_exists("Poha")
    second = catalog.ensure_exists(" Poha ")

    assert first.id == second.id
    assert (second.likes, second.dislikes) == (0, 0)
    assert catalog.list_dishes().pagination.total == 1


def test_ensure_exists_ignores_blank_name(catalog):
    assert catalog.ensure_exists("  ") is None
    assert catalog.ensure_exists("") is None
    assert catalog.list_dishes().pagination.total == 0


def test_ensure_many_skips_blanks_and_duplicates(catalog):
    names = catalog.ensure_many(["Tea", " Bread", "", "Tea"])

    assert names == ["Tea", "Bread"]
    assert catalog.list_dishes().pagination.total == 2


def test_missing_names_preserves_first_seen_order(catalog):
    catalog.ensure_exists("Bread")

    assert catalog.missing_names(["Tea", "Bread", "Soup", "Tea"]) == ["Tea", "Soup"]


def test_bulk_stats_reports_zeros_for_absent_dishes(catalog, ledger):
    catalog.ensure_exists("A")
    ledger.apply_like("user-1", "A")
    ledger.apply_dislike("user-2", "C")

    stats = catalog.bulk_stats(["A", "B", "C"])

    assert [(s.name, s.likes, s.dislikes) for s in stats] == [
        ("A", 1, 0),
        ("B", 0, 0),
        ("C", 0, 1),
    ]


def test_bulk_stats_answers_duplicates_per_occurrence(catalog):
    stats = catalog.bulk_stats(["X", "X"])

    assert len(stats) == 2
    assert all(s.likes == 0 and s.dislikes == 0 for s in stats)


def test_bulk_stats_of_empty_list_is_empty(catalog):
    assert catalog.bulk_stats([]) == []


def test_get_stats_unknown_name_is_zero(catalog):
    stats = catalog.get_stats("Unknown")

    assert (stats.name, stats.likes, stats.dislikes) == ("Unknown", 0, 0)


def test_list_dishes_search_and_sort(catalog, ledger):
    catalog.ensure_many(["Masala Dosa", "Plain Dosa", "Idli"])
    ledger.apply_like("user-1", "Plain Dosa")

    page = catalog.list_dishes(DishListFilter(search="dosa", sort="likes", order="desc"))

    assert [d.name for d in page.items] == ["Plain Dosa", "Masala Dosa"]
    assert page.pagination.total == 2


def test_list_dishes_unknown_sort_falls_back_to_name(catalog):
    catalog.ensure_many(["Upma", "Chai", "Khichdi"])

    page = catalog.list_dishes(DishListFilter(sort="bogus", limit=2))

    assert [d.name for d in page.items] == ["Chai", "Khichdi"]
    assert page.pagination.total == 3
    assert page.pagination.total_pages == 2


def test_get_by_name_raises_for_unknown_dish(catalog):
    catalog.ensure_exists("Poha")

    assert catalog.get_by_name(" Poha").name == "Poha"
    with pytest.raises(DishNotFoundError):
        catalog.get_by_name("Pizza")
