"""
Base service class providing common functionality for all services.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from mealboard.core.logging import get_logger
from mealboard.repositories.base.base_repository import BaseRepository

TRepo = TypeVar("TRepo", bound=BaseRepository)

# Session.info key tracking how many service transactions are open
_TX_DEPTH_KEY = "mealboard_tx_depth"


class BaseService(ABC, Generic[TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction management with commit/rollback at the outermost scope
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(f"mealboard.services.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self):
        """
        Context manager for database transactions with automatic rollback.

        Nested use (one service calling another on the same session)
        joins the outer unit of work; only the outermost scope commits
        or rolls back.

        Example:
            with self.transaction():
                self.repository.create(entity)
        """
        depth = self.db.info.get(_TX_DEPTH_KEY, 0)
        self.db.info[_TX_DEPTH_KEY] = depth + 1
        try:
            yield self.db
            if depth == 0:
                self._commit()
        except Exception as e:
            if depth == 0:
                self._rollback()
                self._logger.debug(f"Transaction rolled back after {type(e).__name__}: {e}")
            raise
        finally:
            self.db.info[_TX_DEPTH_KEY] = depth

    def _commit(self) -> None:
        """Commit the current transaction with error handling."""
        try:
            self.db.commit()
        except Exception as e:
            self._logger.error(f"Commit failed: {e}", exc_info=True)
            self._rollback()
            raise

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
        except Exception as e:
            # Log but don't raise - rollback errors should not mask original error
            self._logger.warning(f"Rollback failed: {e}")
