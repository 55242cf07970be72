"""
Base repositories package.
"""

from mealboard.repositories.base.base_repository import BaseRepository, EntityAlreadyExistsError

__all__ = ["BaseRepository", "EntityAlreadyExistsError"]
