# --- File: mealboard/repositories/menu/menu_repository.py ---
"""
Menu Repository Module.

Manages daily menus: slot lookups, filtered listings, publication
updates and the mapping from rows to draft/published states.
"""

from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import asc, desc, select, update
from sqlalchemy.exc import SQLAlchemyError

from mealboard.core.exceptions import MenuNotFoundError, RepositoryError
from mealboard.domain.menu_state import DraftMenu, MenuState, PublishedMenu
from mealboard.models.base.enums import MealSlot, MenuStatus
from mealboard.models.menu.menu import Menu
from mealboard.repositories.base.base_repository import BaseRepository
from mealboard.utils.date_utils import month_bounds


class MenuRepository(BaseRepository[Menu]):
    """
    Repository for managing menus.

    Handles the (city, date, meal slot) uniqueness, publication and
    the listings used by the admin console and public pages.
    """

    def __init__(self, db_session):
        super().__init__(Menu, db_session)

    # ==================== State mapping ====================

    @staticmethod
    def to_state(menu: Menu) -> MenuState:
        """Map a row to its lifecycle variant."""
        content = dict(
            id=menu.id,
            city_id=menu.city_id,
            menu_date=menu.menu_date,
            meal_slot=MealSlot(menu.meal_slot),
            items=tuple(menu.items or ()),
            total_calories=menu.total_calories,
            created_by=menu.created_by,
            created_at=menu.created_at,
        )
        if menu.status == MenuStatus.PUBLISHED.value:
            return PublishedMenu(published_at=menu.published_at, **content)
        return DraftMenu(**content)

    def save_content(self, menu: Menu, state: DraftMenu) -> Menu:
        """Write a revised draft back to its row."""
        try:
            menu.items = list(state.items)
            menu.total_calories = state.total_calories
            self.db.flush()
            return menu
        except SQLAlchemyError as e:
            raise RepositoryError(f"Menu update failed: {str(e)}") from e

    def save_publication(self, menu: Menu, state: PublishedMenu) -> Menu:
        try:
            menu.status = MenuStatus.PUBLISHED.value
            menu.published_at = state.published_at
            self.db.flush()
            return menu
        except SQLAlchemyError as e:
            raise RepositoryError(f"Menu publish failed: {str(e)}") from e

    # ==================== Lookups ====================

    def get_menu(self, menu_id: str, for_update: bool = False) -> Menu:
        menu = self.find_by_id(menu_id, for_update=for_update)
        if menu is None:
            raise MenuNotFoundError(menu_id)
        return menu

    def find_by_slot(self, city_id: str, menu_date: date, meal_slot: MealSlot) -> Optional[Menu]:
        try:
            return self.db.execute(
                select(Menu)
                .where(Menu.city_id == city_id)
                .where(Menu.menu_date == menu_date)
                .where(Menu.meal_slot == meal_slot.value)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Menu slot lookup failed: {str(e)}") from e

    def _month_conditions(self, city_id: str, year: int, month: int) -> list:
        first, last = month_bounds(year, month)
        return [Menu.city_id == city_id, Menu.menu_date >= first, Menu.menu_date <= last]

    def list_filtered(
        self,
        city_id: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        status: Optional[MenuStatus] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Menu], int]:
        """Admin listing, newest date first."""
        conditions = []
        if city_id:
            conditions.append(Menu.city_id == city_id)
        if year and month:
            first, last = month_bounds(year, month)
            conditions.extend([Menu.menu_date >= first, Menu.menu_date <= last])
        if status:
            conditions.append(Menu.status == status.value)

        query = (
            select(Menu)
            .where(*conditions)
            .order_by(desc(Menu.menu_date), asc(Menu.meal_slot))
            .offset(skip)
            .limit(limit)
        )
        try:
            items = list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Menu listing failed: {str(e)}") from e
        return items, self.count(*conditions)

    def find_published(
        self,
        city_id: str,
        on_date: Optional[date] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[Menu]:
        """Published menus for the public site, oldest date first."""
        conditions = [Menu.city_id == city_id, Menu.status == MenuStatus.PUBLISHED.value]
        if on_date:
            conditions.append(Menu.menu_date == on_date)
        if from_date:
            conditions.append(Menu.menu_date >= from_date)
        if to_date:
            conditions.append(Menu.menu_date <= to_date)

        query = (
            select(Menu)
            .where(*conditions)
            .order_by(asc(Menu.menu_date), asc(Menu.meal_slot))
        )
        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Public menu lookup failed: {str(e)}") from e

    # ==================== Publication ====================

    def count_drafts_in_month(self, city_id: str, year: int, month: int) -> int:
        return self.count(
            *self._month_conditions(city_id, year, month),
            Menu.status == MenuStatus.DRAFT.value,
        )

    def publish_drafts(
        self,
        published_at: datetime,
        ids: Optional[Sequence[str]] = None,
        month_filter: Optional[Tuple[str, int, int]] = None,
    ) -> List[str]:
        """
        Flip matching draft rows to published.

        The matching draft rows are locked first so the returned ids are
        exactly the rows this call transitioned.
        """
        conditions = [Menu.status == MenuStatus.DRAFT.value]
        if ids is not None:
            conditions.append(Menu.id.in_(list(ids)))
        if month_filter is not None:
            conditions.extend(self._month_conditions(*month_filter))

        try:
            draft_ids = list(
                self.db.execute(
                    select(Menu.id)
                    .where(*conditions)
                    .order_by(asc(Menu.menu_date), asc(Menu.meal_slot))
                    .with_for_update()
                ).scalars().all()
            )
            if not draft_ids:
                return []

            self.db.execute(
                update(Menu)
                .where(Menu.id.in_(draft_ids))
                .where(Menu.status == MenuStatus.DRAFT.value)
                .values(status=MenuStatus.PUBLISHED.value, published_at=published_at)
                .execution_options(synchronize_session="fetch")
            )
            return draft_ids
        except SQLAlchemyError as e:
            raise RepositoryError(f"Bulk publish failed: {str(e)}") from e
