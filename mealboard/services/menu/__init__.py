"""
Menu services package.

- DishCatalogService: dish creation and statistics
- VoteLedgerService: like/dislike toggling and counters
- MenuLifecycleService: draft/published menu workflow
- BulkIngestionService: month-batch reconciliation
"""

from mealboard.services.menu.bulk_ingestion_service import BulkIngestionService
from mealboard.services.menu.dish_catalog_service import DishCatalogService, normalize_dish_name
from mealboard.services.menu.menu_lifecycle_service import MenuLifecycleService
from mealboard.services.menu.vote_ledger_service import VoteLedgerService

__all__ = [
    "BulkIngestionService",
    "DishCatalogService",
    "MenuLifecycleService",
    "VoteLedgerService",
    "normalize_dish_name",
]
