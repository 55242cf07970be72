# --- File: mealboard/repositories/menu/vote_repository.py ---
"""
Vote Repository Module.

Per-user vote rows; counter maintenance lives with the dish repository
and both are driven inside one service transaction.
"""

from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from mealboard.core.exceptions import RepositoryError
from mealboard.models.base.enums import VoteType
from mealboard.models.menu.vote import DishVote
from mealboard.repositories.base.base_repository import BaseRepository


class VoteRepository(BaseRepository[DishVote]):
    """Repository for the (user, dish) vote ledger."""

    def __init__(self, db_session):
        super().__init__(DishVote, db_session)

    def find_vote(self, user_id: str, dish_id: str) -> Optional[DishVote]:
        try:
            return self.db.execute(
                select(DishVote)
                .where(DishVote.user_id == user_id)
                .where(DishVote.dish_id == dish_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Vote lookup failed: {str(e)}") from e

    def record(self, user_id: str, dish_id: str, vote_type: VoteType) -> DishVote:
        return self.create(DishVote(user_id=user_id, dish_id=dish_id, vote_type=vote_type.value))

    def change_type(self, vote: DishVote, vote_type: VoteType) -> DishVote:
        try:
            vote.vote_type = vote_type.value
            self.db.flush()
            return vote
        except SQLAlchemyError as e:
            raise RepositoryError(f"Vote update failed: {str(e)}") from e

    def tally(self, dish_id: str) -> Dict[VoteType, int]:
        """Count live votes per type straight from the ledger."""
        try:
            rows = self.db.execute(
                select(DishVote.vote_type, func.count())
                .where(DishVote.dish_id == dish_id)
                .group_by(DishVote.vote_type)
            )
            counts = {VoteType.LIKE: 0, VoteType.DISLIKE: 0}
            for vote_type, total in rows:
                counts[VoteType(vote_type)] = int(total)
            return counts
        except SQLAlchemyError as e:
            raise RepositoryError(f"Vote tally failed: {str(e)}") from e
