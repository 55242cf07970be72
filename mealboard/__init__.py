"""Mealboard: dormitory meal-menu platform core services."""

__version__ = "0.1.0"
