"""
Configuration package for the meal-menu platform.

Holds environment settings; database connection management lives in
``mealboard.config.database``.
"""

from mealboard.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
