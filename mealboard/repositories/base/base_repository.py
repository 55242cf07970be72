"""
Base repository with standardized CRUD operations and error handling.

Repositories never commit: the calling service owns the transaction
boundary, so several repository calls compose into one atomic unit.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mealboard.core.exceptions import RepositoryError
from mealboard.core.logging import get_logger
from mealboard.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class EntityAlreadyExistsError(RepositoryError):
    """Raised when an insert hits a uniqueness constraint"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.status_code = 409


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides create/read/delete operations and error translation
    for all domain repositories.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Insert an entity inside a savepoint.

        A uniqueness violation only rolls back the savepoint, leaving the
        caller's transaction usable.

        Raises:
            EntityAlreadyExistsError: If a unique constraint is violated
        """
        try:
            with self.db.begin_nested():
                self.db.add(entity)
            self.db.refresh(entity)
        except IntegrityError as e:
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} already exists",
                {"constraint_error": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Create failed: {str(e)}") from e

        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def find_by_id(self, id: str, for_update: bool = False) -> Optional[ModelType]:
        """
        Find entity by ID.

        Args:
            id: Entity ID
            for_update: Lock the row until the transaction ends

        Returns:
            Entity or None
        """
        try:
            query = select(self.model).where(self.model.id == id)
            if for_update:
                query = query.with_for_update()
            return self.db.execute(query).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by ID failed: {str(e)}") from e

    def count(self, *conditions) -> int:
        try:
            query = select(func.count()).select_from(self.model)
            if conditions:
                query = query.where(*conditions)
            return int(self.db.execute(query).scalar_one())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Count failed: {str(e)}") from e

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        try:
            self.db.delete(entity)
            self.db.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Delete failed: {str(e)}") from e

        logger.debug(f"Deleted {self.model.__name__} with id: {entity.id}")
