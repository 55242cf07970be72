# mealboard/models/menu/dish.py
"""
Dish catalog SQLAlchemy models.

A dish is a named food item carrying denormalized like/dislike counters
that are kept in step with the per-user vote ledger.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mealboard.models.base.base_model import BaseModel
from mealboard.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from mealboard.models.menu.vote import DishVote

__all__ = ["Dish"]


class Dish(BaseModel, TimestampMixin):
    """
    Canonical dish entry.

    Relationships:
        - DishVote: One-to-many (votes cast on this dish)
    """

    __tablename__ = "dishes"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Trimmed dish name, exact-match unique",
    )

    # Aggregates, written only by the vote ledger
    likes: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default="0",
        nullable=False,
    )
    dislikes: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default="0",
        nullable=False,
    )

    votes: Mapped[List["DishVote"]] = relationship(
        "DishVote",
        back_populates="dish",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_dishes_name"),
        CheckConstraint("likes >= 0", name="ck_dishes_likes_non_negative"),
        CheckConstraint("dislikes >= 0", name="ck_dishes_dislikes_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Dish(name={self.name!r}, likes={self.likes}, dislikes={self.dislikes})>"
