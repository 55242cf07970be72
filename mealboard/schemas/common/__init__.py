from mealboard.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
    PaginatedResponse,
    PaginationMeta,
    format_validation_error,
)

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseFilterSchema",
    "PaginatedResponse",
    "PaginationMeta",
    "format_validation_error",
]
