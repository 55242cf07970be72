"""
Menu repositories package.

Dish catalog, vote ledger and menu lifecycle persistence.
"""

from mealboard.repositories.menu.dish_repository import DishRepository
from mealboard.repositories.menu.menu_repository import MenuRepository
from mealboard.repositories.menu.vote_repository import VoteRepository

__all__ = ["DishRepository", "MenuRepository", "VoteRepository"]
