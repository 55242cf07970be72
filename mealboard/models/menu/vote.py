# mealboard/models/menu/vote.py
"""
Vote ledger SQLAlchemy models.
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mealboard.models.base.base_model import BaseModel
from mealboard.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from mealboard.models.menu.dish import Dish

__all__ = ["DishVote"]


class DishVote(BaseModel, TimestampMixin):
    """
    A single user's live like/dislike on a dish.

    At most one row exists per (user, dish); switching type updates the
    row in place and retracting deletes it.
    """

    __tablename__ = "dish_votes"

    user_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
    )
    dish_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("dishes.id", ondelete="CASCADE"),
        nullable=False,
    )
    vote_type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        comment="like, dislike",
    )

    dish: Mapped["Dish"] = relationship("Dish", back_populates="votes")

    __table_args__ = (
        UniqueConstraint("user_id", "dish_id", name="uq_dish_votes_user_dish"),
        CheckConstraint("vote_type IN ('like', 'dislike')", name="ck_dish_votes_type"),
        Index("ix_dish_votes_dish_type", "dish_id", "vote_type"),
    )

    def __repr__(self) -> str:
        return f"<DishVote(user_id={self.user_id}, dish_id={self.dish_id}, vote_type={self.vote_type})>"
