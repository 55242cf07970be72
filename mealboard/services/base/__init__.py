"""
Base services module.

Provides the service base class with shared logging and
session-scoped transaction management.
"""

from mealboard.services.base.base_service import BaseService

__all__ = ["BaseService"]
