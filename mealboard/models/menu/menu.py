# mealboard/models/menu/menu.py
"""
Menu SQLAlchemy models.

One row per (city, date, meal slot) with the ordered dish list, the
calorie estimate and the draft/published status.
"""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from mealboard.models.base.base_model import BaseModel
from mealboard.models.base.enums import MenuStatus
from mealboard.models.base.mixins import AuditMixin, TimestampMixin

__all__ = ["Menu"]


class Menu(BaseModel, TimestampMixin, AuditMixin):
    """
    Daily meal menu for one city.

    Content columns (items, total_calories) are only written while the
    status is draft; publishing stamps published_at once.
    """

    __tablename__ = "menus"

    city_id: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )
    menu_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )
    meal_slot: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="breakfast, dinner",
    )

    # Ordered dish names
    items: Mapped[List[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    total_calories: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        default=MenuStatus.DRAFT.value,
        server_default=MenuStatus.DRAFT.value,
        nullable=False,
        index=True,
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("city_id", "menu_date", "meal_slot", name="uq_menus_city_date_slot"),
        CheckConstraint("total_calories >= 0", name="ck_menus_calories_non_negative"),
        CheckConstraint("meal_slot IN ('breakfast', 'dinner')", name="ck_menus_meal_slot"),
        CheckConstraint("status IN ('draft', 'published')", name="ck_menus_status"),
        Index("ix_menus_city_status_date", "city_id", "status", "menu_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Menu(city_id={self.city_id}, menu_date={self.menu_date}, "
            f"meal_slot={self.meal_slot}, status={self.status})>"
        )
