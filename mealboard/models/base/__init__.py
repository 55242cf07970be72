"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from mealboard.models.base.base_model import Base, BaseModel
from mealboard.models.base.mixins import AuditMixin, TimestampMixin
from mealboard.models.base.enums import MealSlot, MenuStatus, VoteType

__all__ = [
    "Base",
    "BaseModel",
    "AuditMixin",
    "TimestampMixin",
    "MealSlot",
    "MenuStatus",
    "VoteType",
]
