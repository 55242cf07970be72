"""
Database enums shared by models, schemas and services.
"""

import enum


class MealSlot(str, enum.Enum):
    """Meal slot of a daily menu."""
    BREAKFAST = "breakfast"
    DINNER = "dinner"


class MenuStatus(str, enum.Enum):
    """Menu lifecycle status."""
    DRAFT = "draft"
    PUBLISHED = "published"


class VoteType(str, enum.Enum):
    """A user's approval marker on a dish."""
    LIKE = "like"
    DISLIKE = "dislike"
