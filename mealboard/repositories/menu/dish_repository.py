# --- File: mealboard/repositories/menu/dish_repository.py ---
"""
Dish Repository Module.

Catalog lookups, insert-or-ignore creation and the counter updates
issued by the vote ledger.
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple
from uuid import uuid4

from sqlalchemy import asc, desc, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from mealboard.core.exceptions import RepositoryError
from mealboard.models.menu.dish import Dish
from mealboard.repositories.base.base_repository import BaseRepository

SORTABLE_COLUMNS = {
    "name": Dish.name,
    "likes": Dish.likes,
    "dislikes": Dish.dislikes,
    "created_at": Dish.created_at,
}


class DishRepository(BaseRepository[Dish]):
    """
    Repository for the dish catalog.

    Creation relies on the unique name constraint so concurrent callers
    never produce duplicate rows.
    """

    def __init__(self, db_session):
        super().__init__(Dish, db_session)

    def find_by_name(self, name: str, for_update: bool = False) -> Optional[Dish]:
        query = select(Dish).where(Dish.name == name)
        if for_update:
            query = query.with_for_update()
        try:
            return self.db.execute(query).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find dish failed: {str(e)}") from e

    def existing_names(self, names: Iterable[str]) -> Set[str]:
        """Subset of ``names`` already present in the catalog."""
        wanted = list(set(names))
        if not wanted:
            return set()
        try:
            rows = self.db.execute(select(Dish.name).where(Dish.name.in_(wanted)))
            return {row[0] for row in rows}
        except SQLAlchemyError as e:
            raise RepositoryError(f"Dish lookup failed: {str(e)}") from e

    def stats_by_name(self, names: Iterable[str]) -> Dict[str, Tuple[int, int]]:
        wanted = list(set(names))
        if not wanted:
            return {}
        try:
            rows = self.db.execute(
                select(Dish.name, Dish.likes, Dish.dislikes).where(Dish.name.in_(wanted))
            )
            return {name: (likes, dislikes) for name, likes, dislikes in rows}
        except SQLAlchemyError as e:
            raise RepositoryError(f"Dish stats lookup failed: {str(e)}") from e

    def insert_missing(self, names: Iterable[str]) -> None:
        """
        Insert-or-ignore every name.

        Uses ON CONFLICT DO NOTHING where the dialect supports it and a
        per-name savepoint otherwise.
        """
        unique_names = list(dict.fromkeys(names))
        if not unique_names:
            return

        rows = [
            {"id": str(uuid4()), "name": name, "likes": 0, "dislikes": 0}
            for name in unique_names
        ]
        dialect = self.db.get_bind().dialect.name

        try:
            if dialect == "postgresql":
                stmt = postgresql.insert(Dish).on_conflict_do_nothing(index_elements=["name"])
                self.db.execute(stmt, rows)
            elif dialect == "sqlite":
                stmt = sqlite.insert(Dish).on_conflict_do_nothing(index_elements=["name"])
                self.db.execute(stmt, rows)
            else:
                for row in rows:
                    try:
                        with self.db.begin_nested():
                            self.db.execute(Dish.__table__.insert().values(**row))
                    except IntegrityError:
                        continue
        except SQLAlchemyError as e:
            raise RepositoryError(f"Dish upsert failed: {str(e)}") from e

    def apply_counter_delta(self, dish_id: str, like_delta: int, dislike_delta: int) -> None:
        """Adjust counters with a single SQL expression update."""
        if not like_delta and not dislike_delta:
            return
        try:
            self.db.execute(
                update(Dish)
                .where(Dish.id == dish_id)
                .values(
                    likes=Dish.likes + like_delta,
                    dislikes=Dish.dislikes + dislike_delta,
                )
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Counter update failed: {str(e)}") from e

    def read_counters(self, dish_id: str) -> Tuple[int, int]:
        """Current (likes, dislikes) straight from the row."""
        try:
            likes, dislikes = self.db.execute(
                select(Dish.likes, Dish.dislikes).where(Dish.id == dish_id)
            ).one()
            return likes, dislikes
        except SQLAlchemyError as e:
            raise RepositoryError(f"Counter read failed: {str(e)}") from e

    def search(
        self,
        search: Optional[str] = None,
        sort: str = "name",
        order: str = "asc",
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Dish], int]:
        """Page through the catalog with optional case-insensitive search."""
        conditions = []
        if search:
            conditions.append(func.lower(Dish.name).contains(search.lower(), autoescape=True))

        column = SORTABLE_COLUMNS.get(sort, Dish.name)
        direction = desc if order == "desc" else asc

        query = (
            select(Dish)
            .where(*conditions)
            .order_by(direction(column), asc(Dish.name))
            .offset(skip)
            .limit(limit)
        )
        try:
            items = list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Dish search failed: {str(e)}") from e
        return items, self.count(*conditions)
