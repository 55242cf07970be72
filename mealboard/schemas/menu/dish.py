# --- File: mealboard/schemas/menu/dish.py ---
"""
Dish catalog and voting schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from mealboard.config.settings import settings
from mealboard.models.base.enums import VoteType
from mealboard.schemas.common.base import BaseFilterSchema, BaseSchema

__all__ = [
    "DishStats",
    "DishResponse",
    "DishListFilter",
    "BulkStatsRequest",
    "VoteResult",
]


class DishStats(BaseSchema):
    """Approval counters for one requested dish name."""

    name: str
    likes: int = Field(0, ge=0)
    dislikes: int = Field(0, ge=0)


class DishResponse(DishStats):
    id: str
    created_at: Optional[datetime] = None


class DishListFilter(BaseFilterSchema):
    """Admin dish listing parameters."""

    search: Optional[str] = Field(None, max_length=200)
    sort: str = Field("name", description="name, likes, dislikes or created_at")
    order: Literal["asc", "desc"] = "asc"
    limit: int = Field(settings.DISH_PAGE_SIZE, ge=1, le=200)

    @field_validator("sort", mode="after")
    @classmethod
    def fallback_sort(cls, v: str) -> str:
        # Unknown sort keys fall back to name.
        return v if v in ("name", "likes", "dislikes", "created_at") else "name"


class BulkStatsRequest(BaseSchema):
    names: List[str] = Field(..., description="Dish names, duplicates allowed")


class VoteResult(BaseSchema):
    """Committed counters after a vote plus the caller's active vote."""

    likes: int
    dislikes: int
    user_vote: Optional[VoteType] = None
