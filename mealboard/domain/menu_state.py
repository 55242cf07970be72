"""
Menu lifecycle states.

A menu is either a ``DraftMenu`` (editable, deletable, publishable) or a
``PublishedMenu`` (frozen). Only the draft variant carries mutators, so a
published menu has no code path that changes its content.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Tuple, Union

from mealboard.models.base.enums import MealSlot, MenuStatus


def clean_items(items: Iterable[str]) -> Tuple[str, ...]:
    """Trim dish names and drop blanks, keeping order."""
    cleaned = tuple(name.strip() for name in items if name and name.strip())
    if not cleaned:
        raise ValueError("A menu needs at least one dish")
    return cleaned


def check_calories(total_calories: int) -> int:
    if total_calories is None or int(total_calories) < 0:
        raise ValueError("Calories must be a non-negative integer")
    return int(total_calories)


@dataclass(frozen=True)
class _MenuContent:
    id: str
    city_id: str
    menu_date: date
    meal_slot: MealSlot
    items: Tuple[str, ...]
    total_calories: int
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class DraftMenu(_MenuContent):
    """Editable menu that has not been shown to users yet."""

    status = MenuStatus.DRAFT

    def revise(
        self,
        items: Optional[Sequence[str]] = None,
        total_calories: Optional[int] = None,
    ) -> "DraftMenu":
        """Return a copy with the supplied fields replaced."""
        changes = {}
        if items is not None:
            changes["items"] = clean_items(items)
        if total_calories is not None:
            changes["total_calories"] = check_calories(total_calories)
        return replace(self, **changes)

    def publish(self, published_at: datetime) -> "PublishedMenu":
        return PublishedMenu(
            id=self.id,
            city_id=self.city_id,
            menu_date=self.menu_date,
            meal_slot=self.meal_slot,
            items=self.items,
            total_calories=self.total_calories,
            created_by=self.created_by,
            created_at=self.created_at,
            published_at=published_at,
        )


@dataclass(frozen=True)
class PublishedMenu(_MenuContent):
    """Terminal state: content and publication time are frozen."""

    published_at: Optional[datetime] = None

    status = MenuStatus.PUBLISHED


MenuState = Union[DraftMenu, PublishedMenu]
