"""
Database models package.

Importing this package registers every table on ``Base.metadata``.
"""

from mealboard.models.base import Base, BaseModel, MealSlot, MenuStatus, VoteType
from mealboard.models.menu import Dish, DishVote, Menu

__all__ = [
    "Base",
    "BaseModel",
    "MealSlot",
    "MenuStatus",
    "VoteType",
    "Dish",
    "DishVote",
    "Menu",
]
