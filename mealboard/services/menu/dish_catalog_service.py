"""
Dish catalog service.

Owns dish creation and read-only statistics. Counters are never written
here; the vote ledger is their only writer.
"""

from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from mealboard.core.exceptions import DishNotFoundError, ValidationError
from mealboard.repositories.menu.dish_repository import DishRepository
from mealboard.schemas.common.base import PaginatedResponse, PaginationMeta
from mealboard.schemas.menu.dish import DishListFilter, DishResponse, DishStats
from mealboard.services.base.base_service import BaseService


def normalize_dish_name(name: Optional[str]) -> str:
    return (name or "").strip()


class DishCatalogService(BaseService[DishRepository]):
    """
    Canonical set of named dishes.

    - ensure_exists / ensure_many: idempotent, concurrency-safe creation
    - find_by_name / get_by_name / get_stats / bulk_stats: read accessors
    - list_dishes: admin listing with search and sorting
    """

    def __init__(self, repository: DishRepository, db_session: Session):
        super().__init__(repository, db_session)

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def ensure_exists(self, name: str) -> Optional[DishResponse]:
        """
        Create the dish with zero counters unless it already exists.

        Returns:
            The catalogued dish, or None when the trimmed name is empty
        """
        normalized = normalize_dish_name(name)
        if not normalized:
            return None

        with self.transaction():
            self.repository.insert_missing([normalized])
            dish = self.repository.find_by_name(normalized)
            return DishResponse.model_validate(dish)

    def ensure_many(self, names: Iterable[str]) -> List[str]:
        """
        Make sure every non-blank name exists.

        Returns:
            The trimmed, de-duplicated names in first-seen order
        """
        normalized = list(dict.fromkeys(n for n in (normalize_dish_name(x) for x in names) if n))
        if not normalized:
            return []

        with self.transaction():
            self.repository.insert_missing(normalized)
        return normalized

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_by_name(self, name: str) -> Optional[DishResponse]:
        dish = self.repository.find_by_name(normalize_dish_name(name))
        return DishResponse.model_validate(dish) if dish else None

    def get_by_name(self, name: str) -> DishResponse:
        """
        Same as find_by_name but treats a missing dish as an error.

        Raises:
            DishNotFoundError: If no dish has this name
        """
        dish = self.find_by_name(name)
        if dish is None:
            raise DishNotFoundError(normalize_dish_name(name))
        return dish

    def missing_names(self, names: Iterable[str]) -> List[str]:
        """Names (trimmed, first-seen order) that are not yet in the catalog."""
        normalized = list(dict.fromkeys(n for n in (normalize_dish_name(x) for x in names) if n))
        existing: Set[str] = self.repository.existing_names(normalized)
        return [name for name in normalized if name not in existing]

    def get_stats(self, name: str) -> DishStats:
        """Counters for one dish; an unknown name reports zeros."""
        normalized = normalize_dish_name(name)
        if not normalized:
            raise ValidationError("Dish name is required", {"name": ["must not be empty"]})

        likes, dislikes = self.repository.stats_by_name([normalized]).get(normalized, (0, 0))
        return DishStats(name=normalized, likes=likes, dislikes=dislikes)

    def bulk_stats(self, names: List[str]) -> List[DishStats]:
        """
        Counters for every requested name, in request order.

        Absent dishes are reported as zero; duplicates in the request are
        answered once per occurrence.
        """
        if names is None:
            raise ValidationError("A list of dish names is required", {"names": ["required"]})

        stats = self.repository.stats_by_name(normalize_dish_name(n) for n in names)
        result = []
        for name in names:
            likes, dislikes = stats.get(normalize_dish_name(name), (0, 0))
            result.append(DishStats(name=name, likes=likes, dislikes=dislikes))
        return result

    def list_dishes(self, filters: Optional[DishListFilter] = None) -> PaginatedResponse[DishResponse]:
        filters = filters or DishListFilter()
        dishes, total = self.repository.search(
            search=filters.search,
            sort=filters.sort,
            order=filters.order,
            skip=filters.offset,
            limit=filters.limit,
        )
        return PaginatedResponse[DishResponse](
            items=[DishResponse.model_validate(d) for d in dishes],
            pagination=PaginationMeta.build(filters.page, filters.limit, total),
        )
