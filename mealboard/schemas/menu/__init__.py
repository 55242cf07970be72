from mealboard.schemas.menu.bulk_upload import (
    BulkMenuUpload,
    DayMenuEntry,
    IngestionReport,
    MealPayload,
)
from mealboard.schemas.menu.dish import (
    BulkStatsRequest,
    DishListFilter,
    DishResponse,
    DishStats,
    VoteResult,
)
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

__all__ = [
    "BulkMenuUpload",
    "DayMenuEntry",
    "IngestionReport",
    "MealPayload",
    "BulkStatsRequest",
    "DishListFilter",
    "DishResponse",
    "DishStats",
    "VoteResult",
    "BulkPublishRequest",
    "MenuCreate",
    "MenuListFilter",
    "MenuResponse",
    "MenuUpdate",
    "MonthFilter",
    "MonthlyMeal",
    "MonthlyMenuDay",
    "MonthlyMenuResponse",
    "PublishBulkResult",
    "PublishMonthResult",
]
