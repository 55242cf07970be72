"""
Bulk menu ingestion.

Reconciles a month of externally authored menus for one city against
the stored menus. Re-running the same batch is safe: slots that already
have a menu are counted as skipped, and a bad day is reported in the
result without stopping the rest of the batch.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from mealboard.core.exceptions import BaseAppException, DuplicateMenuError, ValidationError
from mealboard.core.security import require_user_id
from mealboard.models.base.enums import MealSlot
from mealboard.repositories.menu.menu_repository import MenuRepository
from mealboard.schemas.common.base import format_validation_error
from mealboard.schemas.menu.bulk_upload import (
    BulkMenuUpload,
    DayMenuEntry,
    IngestionReport,
    MealPayload,
)
from mealboard.schemas.menu.menu import MenuCreate
from mealboard.services.base.base_service import BaseService
from mealboard.services.menu.dish_catalog_service import DishCatalogService
from mealboard.services.menu.menu_lifecycle_service import MenuLifecycleService
from mealboard.utils.date_utils import build_menu_date


@dataclass
class _PlannedMeal:
    menu_date: date
    meal_slot: MealSlot
    payload: MealPayload


def _is_blank_meal(raw: Any) -> bool:
    # A meal without dishes is treated as not supplied
    if raw is None:
        return True
    if isinstance(raw, dict):
        items = raw.get("items")
        return items is None or items == []
    return False


class BulkIngestionService(BaseService[MenuRepository]):
    """Idempotent month-batch reconciliation."""

    def __init__(
        self,
        repository: MenuRepository,
        menus: MenuLifecycleService,
        catalog: DishCatalogService,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.menus = menus
        self.catalog = catalog

    def reconcile(self, upload: Union[BulkMenuUpload, dict], author_id: Optional[str]) -> IngestionReport:
        """
        Create every missing draft menu described by the batch.

        Returns:
            IngestionReport with created/skipped counts, per-day errors
            and the dish names that were new to the catalog
        """
        author = require_user_id(author_id)
        if not isinstance(upload, BulkMenuUpload):
            try:
                upload = BulkMenuUpload.model_validate(upload)
            except PydanticValidationError as e:
                raise ValidationError(format_validation_error(e)) from e

        report = IngestionReport()
        planned = self._plan(upload, report)

        all_names = [name for meal in planned for name in meal.payload.items]
        report.new_foods = self.catalog.missing_names(all_names)
        self.catalog.ensure_many(all_names)

        for meal in planned:
            label = f"{meal.menu_date.isoformat()} {meal.meal_slot.value}"
            try:
                self.menus.create(
                    MenuCreate(
                        city_id=upload.city_id,
                        menu_date=meal.menu_date,
                        meal_slot=meal.meal_slot,
                        items=meal.payload.items,
                        total_calories=meal.payload.calories,
                    ),
                    author,
                )
                report.created += 1
            except DuplicateMenuError:
                report.skipped += 1
            except PydanticValidationError as e:
                self._record_error(report, label, format_validation_error(e))
            except BaseAppException as e:
                self._record_error(report, label, e.message)

        self._logger.info(
            f"Reconciled {upload.city_id} {upload.year}-{upload.month:02d}: "
            f"{report.created} created, {report.skipped} skipped, {len(report.errors)} errors",
            extra={
                "city_id": upload.city_id,
                "created_count": report.created,
                "skipped_count": report.skipped,
                "error_count": len(report.errors),
                "new_food_count": len(report.new_foods),
            },
        )
        return report

    # -------------------------------------------------------------------------
    # Planning
    # -------------------------------------------------------------------------

    def _plan(self, upload: BulkMenuUpload, report: IngestionReport) -> List[_PlannedMeal]:
        """Validate each day entry on its own, collecting errors instead of raising."""
        planned: List[_PlannedMeal] = []

        for index, raw_entry in enumerate(upload.menus, start=1):
            try:
                entry = DayMenuEntry.model_validate(raw_entry)
            except PydanticValidationError as e:
                day = raw_entry.get("day") if isinstance(raw_entry, dict) else None
                label = f"day {day}" if day is not None else f"entry {index}"
                self._record_error(report, label, format_validation_error(e))
                continue

            present = [slot for slot in MealSlot if not _is_blank_meal(getattr(entry, slot.value))]

            try:
                menu_date = build_menu_date(upload.year, upload.month, entry.day)
            except ValueError as e:
                for slot in present:
                    self._record_error(report, f"day {entry.day} {slot.value}", str(e))
                continue

            for slot in present:
                raw_meal = getattr(entry, slot.value)
                try:
                    payload = MealPayload.model_validate(raw_meal)
                except PydanticValidationError as e:
                    self._record_error(
                        report, f"{menu_date.isoformat()} {slot.value}", format_validation_error(e)
                    )
                    continue
                planned.append(_PlannedMeal(menu_date=menu_date, meal_slot=slot, payload=payload))

        return planned

    def _record_error(self, report: IngestionReport, label: str, reason: str) -> None:
        message = f"{label}: {reason}"
        report.errors.append(message)
        self._logger.warning(f"Bulk ingestion entry rejected: {message}")
