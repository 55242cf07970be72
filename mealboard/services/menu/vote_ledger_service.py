"""
Vote ledger service.

Keeps per-user dish votes and the denormalized dish counters in step.
Each like/dislike request resolves the toggle transition, writes the
vote row and the counter delta, and reads the committed counters back,
all inside one transaction holding the dish row lock.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from mealboard.core.exceptions import ValidationError
from mealboard.core.security import require_user_id
from mealboard.domain.vote_transition import VoteTransition, resolve_vote
from mealboard.models.base.enums import VoteType
from mealboard.repositories.menu.dish_repository import DishRepository
from mealboard.repositories.menu.vote_repository import VoteRepository
from mealboard.schemas.menu.dish import DishStats, VoteResult
from mealboard.services.base.base_service import BaseService
from mealboard.services.menu.dish_catalog_service import DishCatalogService, normalize_dish_name


class VoteLedgerService(BaseService[VoteRepository]):
    """
    Like/dislike toggling with consistent aggregates.

    Two concurrent voters on the same dish serialize on the dish row
    lock; votes on different dishes do not contend.
    """

    def __init__(
        self,
        repository: VoteRepository,
        dish_repository: DishRepository,
        catalog: DishCatalogService,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.dishes = dish_repository
        self.catalog = catalog

    def apply_like(self, user_id: Optional[str], dish_name: str) -> VoteResult:
        return self._apply(user_id, dish_name, VoteType.LIKE)

    def apply_dislike(self, user_id: Optional[str], dish_name: str) -> VoteResult:
        return self._apply(user_id, dish_name, VoteType.DISLIKE)

    def get_user_vote(self, user_id: Optional[str], dish_name: str) -> Optional[VoteType]:
        """The caller's active vote, or None when there is none or the dish is unknown."""
        user = require_user_id(user_id)
        name = self._require_name(dish_name)

        dish = self.dishes.find_by_name(name)
        if dish is None:
            return None

        vote = self.repository.find_vote(user, dish.id)
        return VoteType(vote.vote_type) if vote else None

    def bulk_stats(self, names: List[str]) -> List[DishStats]:
        return self.catalog.bulk_stats(names)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_name(dish_name: str) -> str:
        name = normalize_dish_name(dish_name)
        if not name:
            raise ValidationError("Dish name is required", {"name": ["must not be empty"]})
        return name

    def _apply(self, user_id: Optional[str], dish_name: str, requested: VoteType) -> VoteResult:
        user = require_user_id(user_id)
        name = self._require_name(dish_name)

        with self.transaction():
            self.catalog.ensure_many([name])

            # Row lock on the dish serializes concurrent togglers
            dish = self.dishes.find_by_name(name, for_update=True)
            dish_id = dish.id
            vote = self.repository.find_vote(user, dish_id)
            existing = VoteType(vote.vote_type) if vote else None

            transition = resolve_vote(existing, requested)
            self._write_vote(user, dish_id, vote, transition)
            self.dishes.apply_counter_delta(dish_id, transition.like_delta, transition.dislike_delta)

            likes, dislikes = self.dishes.read_counters(dish_id)

        self._logger.info(
            f"Vote on '{name}': {existing.value if existing else 'none'} -> "
            f"{transition.result.value if transition.result else 'none'}",
            extra={"dish_id": dish_id, "voter_id": user, "likes": likes, "dislikes": dislikes},
        )
        return VoteResult(likes=likes, dislikes=dislikes, user_vote=transition.result)

    def _write_vote(self, user: str, dish_id: str, vote, transition: VoteTransition) -> None:
        if transition.result is None:
            self.repository.delete(vote)
        elif vote is None:
            self.repository.record(user, dish_id, transition.result)
        else:
            self.repository.change_type(vote, transition.result)
