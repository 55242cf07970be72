# --- File: mealboard/schemas/menu/menu.py ---
"""
Menu lifecycle schemas with validation.

Covers menu authoring, partial updates, publication results and the
read models used by the admin console and the public site.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from mealboard.config.settings import settings
from mealboard.models.base.enums import MealSlot, MenuStatus
from mealboard.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "MenuCreate",
    "MenuUpdate",
    "MenuResponse",
    "MenuListFilter",
    "MonthFilter",
    "BulkPublishRequest",
    "PublishBulkResult",
    "PublishMonthResult",
    "MonthlyMeal",
    "MonthlyMenuDay",
    "MonthlyMenuResponse",
]


def _clean_item_names(items: List[str]) -> List[str]:
    cleaned = [name.strip() for name in items if isinstance(name, str) and name.strip()]
    if not cleaned:
        raise ValueError("At least one dish is required")
    if len(cleaned) > settings.MENU_MAX_DISHES:
        raise ValueError(f"A menu cannot list more than {settings.MENU_MAX_DISHES} dishes")
    return cleaned


class MenuCreate(BaseCreateSchema):
    """Authoring payload for a single draft menu."""

    city_id: str = Field(..., min_length=1, max_length=50)
    menu_date: Date
    meal_slot: MealSlot
    items: List[str] = Field(..., min_length=1)
    total_calories: int = Field(0, ge=0)

    @field_validator("items", mode="after")
    @classmethod
    def validate_items(cls, v: List[str]) -> List[str]:
        return _clean_item_names(v)


class MenuUpdate(BaseUpdateSchema):
    """Partial update; fields left as None keep their stored value."""

    items: Optional[List[str]] = None
    total_calories: Optional[int] = Field(None, ge=0)

    @field_validator("items", mode="after")
    @classmethod
    def validate_items(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return _clean_item_names(v)


class MenuResponse(BaseSchema):
    id: str
    city_id: str
    menu_date: Date
    meal_slot: MealSlot
    items: List[str]
    total_calories: int
    status: MenuStatus
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    published_at: Optional[datetime] = None

    @classmethod
    def from_state(cls, state) -> "MenuResponse":
        return cls(
            id=state.id,
            city_id=state.city_id,
            menu_date=state.menu_date,
            meal_slot=state.meal_slot,
            items=list(state.items),
            total_calories=state.total_calories,
            status=state.status,
            created_by=state.created_by,
            created_at=state.created_at,
            published_at=getattr(state, "published_at", None),
        )


class MonthFilter(BaseSchema):
    city_id: str = Field(..., min_length=1, max_length=50)
    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)


class MenuListFilter(BaseFilterSchema):
    """Admin menu listing; year and month only apply together."""

    city_id: Optional[str] = None
    year: Optional[int] = Field(None, ge=1900, le=9999)
    month: Optional[int] = Field(None, ge=1, le=12)
    status: Optional[MenuStatus] = None

    @model_validator(mode="after")
    def check_month_pair(self) -> "MenuListFilter":
        if (self.year is None) != (self.month is None):
            raise ValueError("year and month must be supplied together")
        return self


class BulkPublishRequest(BaseSchema):
    ids: List[str] = Field(..., min_length=1)

    @field_validator("ids", mode="after")
    @classmethod
    def validate_ids(cls, v: List[str]) -> List[str]:
        if len(v) > settings.BULK_PUBLISH_MAX_IDS:
            raise ValueError(f"Cannot publish more than {settings.BULK_PUBLISH_MAX_IDS} menus at once")
        # Keep first occurrence order
        return list(dict.fromkeys(v))


class PublishBulkResult(BaseSchema):
    requested: int
    published_ids: List[str]

    @property
    def published_count(self) -> int:
        return len(self.published_ids)


class PublishMonthResult(BaseSchema):
    city_id: str
    year: int
    month: int
    published_count: int
    published_ids: List[str] = Field(default_factory=list)


class MonthlyMeal(BaseSchema):
    items: List[str]
    calories: int


class MonthlyMenuDay(BaseSchema):
    date: Date
    breakfast: Optional[MonthlyMeal] = None
    dinner: Optional[MonthlyMeal] = None
    breakfast_id: Optional[str] = None
    dinner_id: Optional[str] = None


class MonthlyMenuResponse(BaseSchema):
    city_id: str
    year: int
    month: int
    days: List[MonthlyMenuDay]
