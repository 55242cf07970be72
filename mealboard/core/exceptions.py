"""
Custom Exceptions for the meal-menu platform

This module defines the exception classes raised by repositories and
services so callers can branch on a specific outcome instead of
parsing messages.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Menu state conflicts
    DUPLICATE_MENU = "DUPLICATE_MENU"
    MENU_PUBLISHED = "MENU_PUBLISHED"
    ALREADY_PUBLISHED = "ALREADY_PUBLISHED"
    NOTHING_TO_PUBLISH = "NOTHING_TO_PUBLISH"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when input validation fails before any store access"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class AuthenticationError(BaseAppException):
    """Exception raised when no verified identity accompanies a request"""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, ErrorCode.AUTHENTICATION_FAILED, {}, 401)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class MenuNotFoundError(ResourceNotFoundError):
    """Exception raised when a menu is not found"""

    def __init__(self, menu_id: Optional[str] = None):
        super().__init__("Menu", menu_id)


class DishNotFoundError(ResourceNotFoundError):
    """Exception raised when a dish is not found"""

    def __init__(self, name: Optional[str] = None):
        super().__init__("Dish", name)


# ========================================
# Repository Exceptions
# ========================================

class RepositoryError(BaseAppException):
    """Exception raised when the store rejects or fails an operation"""

    def __init__(self, message: str = "Database operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.DATABASE_ERROR, details, 500)


# ========================================
# Menu State Conflicts
# ========================================

class StateConflictError(BaseAppException):
    """Base class for 'exists but in the wrong state' outcomes"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 409)


class DuplicateMenuError(StateConflictError):
    """A menu already exists for the (city, date, meal slot) triple"""

    def __init__(self, city_id: str, menu_date: Any, meal_slot: str, existing_id: Optional[str] = None):
        super().__init__(
            f"A {meal_slot} menu for {city_id} on {menu_date} already exists",
            ErrorCode.DUPLICATE_MENU,
            {
                "city_id": city_id,
                "menu_date": str(menu_date),
                "meal_slot": meal_slot,
                "existing_id": existing_id,
            },
        )
        self.existing_id = existing_id


class MenuPublishedError(StateConflictError):
    """A published menu cannot be edited or deleted"""

    def __init__(self, menu_id: str, action: str = "modify"):
        super().__init__(
            f"Published menu cannot be {action}d",
            ErrorCode.MENU_PUBLISHED,
            {"menu_id": menu_id, "action": action},
        )


class AlreadyPublishedError(StateConflictError):
    """The menu is already published"""

    def __init__(self, menu_id: str):
        super().__init__(
            "Menu is already published",
            ErrorCode.ALREADY_PUBLISHED,
            {"menu_id": menu_id},
        )


class NothingToPublishError(StateConflictError):
    """No draft menus match the requested month"""

    def __init__(self, city_id: str, year: int, month: int):
        super().__init__(
            f"No draft menus to publish for {city_id} in {year}-{month:02d}",
            ErrorCode.NOTHING_TO_PUBLISH,
            {"city_id": city_id, "year": year, "month": month},
        )


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "AuthenticationError",
    "ResourceNotFoundError",
    "MenuNotFoundError",
    "DishNotFoundError",
    "RepositoryError",
    "StateConflictError",
    "DuplicateMenuError",
    "MenuPublishedError",
    "AlreadyPublishedError",
    "NothingToPublishError",
]
