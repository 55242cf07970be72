"""
Menu lifecycle service.

Authoring, editing and publication of daily menus. A menu moves from
draft to published exactly once; after that its content is frozen and
it can no longer be edited or deleted.
"""

from collections import OrderedDict
from datetime import date
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from mealboard.core.exceptions import (
    AlreadyPublishedError,
    DuplicateMenuError,
    MenuPublishedError,
    NothingToPublishError,
    ValidationError,
)
from mealboard.core.security import require_user_id
from mealboard.domain.menu_state import PublishedMenu
from mealboard.models.base.enums import MealSlot
from mealboard.models.menu.menu import Menu
from mealboard.repositories.base.base_repository import EntityAlreadyExistsError
from mealboard.repositories.menu.menu_repository import MenuRepository
from mealboard.schemas.common.base import PaginatedResponse, PaginationMeta, format_validation_error
from mealboard.schemas.menu.menu import (
    BulkPublishRequest,
    MenuCreate,
    MenuListFilter,
    MenuResponse,
    MenuUpdate,
    MonthFilter,
    MonthlyMeal,
    MonthlyMenuDay,
    MonthlyMenuResponse,
    PublishBulkResult,
    PublishMonthResult,
)
from mealboard.services.base.base_service import BaseService
from mealboard.services.menu.dish_catalog_service import DishCatalogService
from mealboard.utils.date_utils import month_bounds, utcnow


class MenuLifecycleService(BaseService[MenuRepository]):
    """
    Draft/published state machine for menus.

    Every operation is one atomic unit: it either applies fully or
    raises a named error with nothing written.
    """

    def __init__(
        self,
        repository: MenuRepository,
        catalog: DishCatalogService,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.catalog = catalog

    # -------------------------------------------------------------------------
    # Authoring
    # -------------------------------------------------------------------------

    def create(self, data: MenuCreate, author_id: Optional[str]) -> MenuResponse:
        """
        Persist a new draft menu and make sure its dishes are catalogued.

        Raises:
            DuplicateMenuError: If the (city, date, meal slot) slot is taken
        """
        author = require_user_id(author_id)

        with self.transaction():
            existing = self.repository.find_by_slot(data.city_id, data.menu_date, data.meal_slot)
            if existing is not None:
                raise DuplicateMenuError(data.city_id, data.menu_date, data.meal_slot.value, existing.id)

            self.catalog.ensure_many(data.items)

            menu = Menu(
                city_id=data.city_id,
                menu_date=data.menu_date,
                meal_slot=data.meal_slot.value,
                items=list(data.items),
                total_calories=data.total_calories,
                created_by=author,
            )
            try:
                self.repository.create(menu)
            except EntityAlreadyExistsError as e:
                # Lost the race against a concurrent create for the same slot
                raise DuplicateMenuError(data.city_id, data.menu_date, data.meal_slot.value) from e

            response = MenuResponse.from_state(self.repository.to_state(menu))

        self._logger.info(
            f"Created draft {data.meal_slot.value} menu for {data.city_id} on {data.menu_date}",
            extra={"menu_id": response.id, "author_id": author},
        )
        return response

    def update(self, menu_id: str, data: MenuUpdate) -> MenuResponse:
        """
        Replace the supplied fields of a draft menu.

        Raises:
            MenuNotFoundError: If the menu does not exist
            MenuPublishedError: If the menu is already published
        """
        with self.transaction():
            menu = self.repository.get_menu(menu_id, for_update=True)
            state = self.repository.to_state(menu)
            if isinstance(state, PublishedMenu):
                raise MenuPublishedError(menu_id, "update")

            try:
                revised = state.revise(items=data.items, total_calories=data.total_calories)
            except ValueError as e:
                raise ValidationError(str(e)) from e

            if data.items is not None:
                self.catalog.ensure_many(revised.items)

            self.repository.save_content(menu, revised)
            response = MenuResponse.from_state(revised)

        self._logger.info(f"Updated draft menu {menu_id}", extra={"menu_id": menu_id})
        return response

    def delete(self, menu_id: str) -> None:
        """
        Remove a draft menu.

        Raises:
            MenuNotFoundError: If the menu does not exist
            MenuPublishedError: If the menu is already published
        """
        with self.transaction():
            menu = self.repository.get_menu(menu_id, for_update=True)
            if isinstance(self.repository.to_state(menu), PublishedMenu):
                raise MenuPublishedError(menu_id, "delete")
            self.repository.delete(menu)

        self._logger.info(f"Deleted draft menu {menu_id}", extra={"menu_id": menu_id})

    # -------------------------------------------------------------------------
    # Publication
    # -------------------------------------------------------------------------

    def publish(self, menu_id: str) -> MenuResponse:
        """
        Publish a single draft menu.

        Raises:
            MenuNotFoundError: If the menu does not exist
            AlreadyPublishedError: If the menu is already published
        """
        with self.transaction():
            menu = self.repository.get_menu(menu_id, for_update=True)
            state = self.repository.to_state(menu)
            if isinstance(state, PublishedMenu):
                raise AlreadyPublishedError(menu_id)

            published = state.publish(utcnow())
            self.repository.save_publication(menu, published)
            response = MenuResponse.from_state(published)

        self._logger.info(f"Published menu {menu_id}", extra={"menu_id": menu_id})
        return response

    def publish_bulk(self, menu_ids: List[str]) -> PublishBulkResult:
        """
        Publish every listed menu that is still a draft.

        Unknown and already-published ids are left out of the result
        instead of failing the batch.
        """
        try:
            request = BulkPublishRequest(ids=menu_ids or [])
        except PydanticValidationError as e:
            raise ValidationError(format_validation_error(e)) from e

        with self.transaction():
            published_ids = self.repository.publish_drafts(utcnow(), ids=request.ids)

        self._logger.info(
            f"Bulk published {len(published_ids)} of {len(request.ids)} menus",
            extra={"published_count": len(published_ids)},
        )
        return PublishBulkResult(requested=len(request.ids), published_ids=published_ids)

    def publish_month(self, city_id: str, year: int, month: int) -> PublishMonthResult:
        """
        Publish every draft of a city's month.

        Raises:
            NothingToPublishError: If the month has no drafts
        """
        try:
            scope = MonthFilter(city_id=city_id, year=year, month=month)
        except PydanticValidationError as e:
            raise ValidationError(format_validation_error(e)) from e

        with self.transaction():
            if self.repository.count_drafts_in_month(scope.city_id, scope.year, scope.month) == 0:
                raise NothingToPublishError(scope.city_id, scope.year, scope.month)

            published_ids = self.repository.publish_drafts(
                utcnow(), month_filter=(scope.city_id, scope.year, scope.month)
            )

        self._logger.info(
            f"Published {len(published_ids)} menus for {scope.city_id} {scope.year}-{scope.month:02d}",
            extra={"published_count": len(published_ids)},
        )
        return PublishMonthResult(
            city_id=scope.city_id,
            year=scope.year,
            month=scope.month,
            published_count=len(published_ids),
            published_ids=published_ids,
        )

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    def get(self, menu_id: str) -> MenuResponse:
        menu = self.repository.get_menu(menu_id)
        return MenuResponse.from_state(self.repository.to_state(menu))

    def list_menus(self, filters: Optional[MenuListFilter] = None) -> PaginatedResponse[MenuResponse]:
        filters = filters or MenuListFilter()
        menus, total = self.repository.list_filtered(
            city_id=filters.city_id,
            year=filters.year,
            month=filters.month,
            status=filters.status,
            skip=filters.offset,
            limit=filters.limit,
        )
        return PaginatedResponse[MenuResponse](
            items=[MenuResponse.from_state(self.repository.to_state(m)) for m in menus],
            pagination=PaginationMeta.build(filters.page, filters.limit, total),
        )

    def public_menus(self, city_id: str, on_date: Optional[date] = None) -> List[MenuResponse]:
        """Published menus for a city: one day, or today onward."""
        if not city_id or not city_id.strip():
            raise ValidationError("City is required", {"city_id": ["must not be empty"]})

        if on_date is not None:
            menus = self.repository.find_published(city_id.strip(), on_date=on_date)
        else:
            menus = self.repository.find_published(city_id.strip(), from_date=date.today())
        return [MenuResponse.from_state(self.repository.to_state(m)) for m in menus]

    def monthly_menu(self, city_id: str, year: int, month: int) -> MonthlyMenuResponse:
        """Published menus of a month grouped per day."""
        try:
            scope = MonthFilter(city_id=city_id, year=year, month=month)
        except PydanticValidationError as e:
            raise ValidationError(format_validation_error(e)) from e

        first, last = month_bounds(scope.year, scope.month)
        menus = self.repository.find_published(scope.city_id, from_date=first, to_date=last)

        days: Dict[date, Dict] = OrderedDict()
        for menu in menus:
            day = days.setdefault(menu.menu_date, {"date": menu.menu_date})
            meal = MonthlyMeal(items=list(menu.items), calories=menu.total_calories)
            if menu.meal_slot == MealSlot.BREAKFAST.value:
                day["breakfast"], day["breakfast_id"] = meal, menu.id
            else:
                day["dinner"], day["dinner_id"] = meal, menu.id

        return MonthlyMenuResponse(
            city_id=scope.city_id,
            year=scope.year,
            month=scope.month,
            days=[MonthlyMenuDay(**entry) for entry in days.values()],
        )
