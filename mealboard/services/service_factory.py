"""
Service factory for dependency injection and service instantiation.
"""

from typing import Callable, Dict

from sqlalchemy.orm import Session

from mealboard.core.logging import get_logger
from mealboard.repositories.menu.dish_repository import DishRepository
from mealboard.repositories.menu.menu_repository import MenuRepository
from mealboard.repositories.menu.vote_repository import VoteRepository
from mealboard.services.base.base_service import BaseService
from mealboard.services.menu.bulk_ingestion_service import BulkIngestionService
from mealboard.services.menu.dish_catalog_service import DishCatalogService
from mealboard.services.menu.menu_lifecycle_service import MenuLifecycleService
from mealboard.services.menu.vote_ledger_service import VoteLedgerService


class ServiceFactory:
    """
    Factory for creating service instances bound to one session.

    Services are cached per factory so that nested services share the
    same catalog instance and, through the session, the same unit of work.
    """

    def __init__(self, db_session: Session):
        """
        Initialize service factory.

        Args:
            db_session: SQLAlchemy database session
        """
        self.db = db_session
        self._logger = get_logger(self.__class__.__name__)

        # Service cache to reuse instances
        self._service_cache: Dict[str, BaseService] = {}

    def _get_or_create(self, cache_key: str, builder: Callable[[], BaseService], use_cache: bool):
        if use_cache and cache_key in self._service_cache:
            return self._service_cache[cache_key]

        service = builder()

        if use_cache:
            self._service_cache[cache_key] = service

        self._logger.debug(f"Created {service.__class__.__name__} instance")
        return service

    # -------------------------------------------------------------------------
    # Service Getters
    # -------------------------------------------------------------------------

    def dish_catalog(self, use_cache: bool = True) -> DishCatalogService:
        return self._get_or_create(
            "dish_catalog_service",
            lambda: DishCatalogService(DishRepository(self.db), self.db),
            use_cache,
        )

    def vote_ledger(self, use_cache: bool = True) -> VoteLedgerService:
        return self._get_or_create(
            "vote_ledger_service",
            lambda: VoteLedgerService(
                VoteRepository(self.db),
                DishRepository(self.db),
                self.dish_catalog(),
                self.db,
            ),
            use_cache,
        )

    def menu_lifecycle(self, use_cache: bool = True) -> MenuLifecycleService:
        return self._get_or_create(
            "menu_lifecycle_service",
            lambda: MenuLifecycleService(MenuRepository(self.db), self.dish_catalog(), self.db),
            use_cache,
        )

    def bulk_ingestion(self, use_cache: bool = True) -> BulkIngestionService:
        return self._get_or_create(
            "bulk_ingestion_service",
            lambda: BulkIngestionService(
                MenuRepository(self.db),
                self.menu_lifecycle(),
                self.dish_catalog(),
                self.db,
            ),
            use_cache,
        )

    # -------------------------------------------------------------------------
    # Service Management
    # -------------------------------------------------------------------------

    def clear_cache(self) -> None:
        """Clear all cached service instances."""
        count = len(self._service_cache)
        self._service_cache.clear()
        self._logger.info(f"Cleared {count} cached service instances")

    def get_cached_services(self) -> Dict[str, str]:
        """
        Get information about cached services.

        Returns:
            Dictionary mapping cache keys to service class names
        """
        return {key: service.__class__.__name__ for key, service in self._service_cache.items()}

    def close(self) -> None:
        """Release cached services; the session is owned by the caller."""
        self.clear_cache()
        self._logger.debug("ServiceFactory closed")
