# --- File: mealboard/schemas/menu/bulk_upload.py ---
"""
Bulk menu ingestion schemas.

The upload envelope is validated up front; individual day entries are
kept loose so a malformed day can be reported without rejecting the
whole batch.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import ConfigDict, Field, field_validator

from mealboard.schemas.common.base import BaseSchema

__all__ = [
    "MealPayload",
    "DayMenuEntry",
    "BulkMenuUpload",
    "IngestionReport",
]


class MealPayload(BaseSchema):
    """One breakfast or dinner inside a day entry."""

    items: List[str] = Field(..., min_length=1)
    calories: int = Field(0, ge=0)

    @field_validator("items", mode="after")
    @classmethod
    def strip_items(cls, v: List[str]) -> List[str]:
        cleaned = [name.strip() for name in v if name.strip()]
        if not cleaned:
            raise ValueError("At least one dish is required")
        return cleaned

    @field_validator("calories", mode="before")
    @classmethod
    def default_calories(cls, v: Any) -> Any:
        return 0 if v is None else v


class DayMenuEntry(BaseSchema):
    model_config = ConfigDict(extra="ignore")

    day: int = Field(..., ge=1, le=31)
    breakfast: Optional[Any] = None
    dinner: Optional[Any] = None


class BulkMenuUpload(BaseSchema):
    """A month of menus for one city."""

    city_id: str = Field(..., min_length=1, max_length=50)
    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)
    menus: List[Any] = Field(default_factory=list)


class IngestionReport(BaseSchema):
    """Outcome of one reconciliation run; never persisted."""

    created: int = 0
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)
    new_foods: List[str] = Field(default_factory=list)
