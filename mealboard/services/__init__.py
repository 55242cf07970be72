# mealboard/services/__init__.py
"""
Service layer root package.

Each subpackage implements use-cases on top of:

- SQLAlchemy models (mealboard.models.*)
- Repositories (mealboard.repositories.*)
- Pydantic schemas (mealboard.schemas.*)

Services are normally obtained through ServiceFactory so that they
share one session:

    factory = ServiceFactory(session)
    factory.vote_ledger().apply_like(user_id, "Poha")
"""

from mealboard.services.service_factory import ServiceFactory

__all__ = ["ServiceFactory"]
