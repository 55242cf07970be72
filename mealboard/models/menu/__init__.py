"""Menu, dish and vote models."""

from mealboard.models.menu.dish import Dish
from mealboard.models.menu.menu import Menu
from mealboard.models.menu.vote import DishVote

__all__ = ["Dish", "DishVote", "Menu"]
