"""
Custom Exception Classes for the Localizer host

This module defines custom exceptions for consistent error responses
across the application. Every exception carries a machine-readable
``ErrorCode`` so clients can localize the message themselves.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the error envelope."""

    # Locale errors
    LOCALE_INVALID_REDIRECT_TARGET = "LOCALE_INVALID_REDIRECT_TARGET"
    LOCALE_UNSUPPORTED = "LOCALE_UNSUPPORTED"

    # Generic errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class LocalizerError(Exception):
    """Base exception class for all localizer exceptions"""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Locale Exceptions
# ============================================================================


class InvalidRedirectTargetError(LocalizerError):
    """Raised when a culture switch asks to redirect somewhere that is not a local path"""

    error_code = ErrorCode.LOCALE_INVALID_REDIRECT_TARGET

    def __init__(self, redirect_uri: str | None = None):
        message = "Redirect target is missing" if not redirect_uri else "Redirect target must be a local path"
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"redirect_uri": redirect_uri},
        )


class UnsupportedLocaleError(LocalizerError):
    """Raised when a requested culture is not in the supported locale set"""

    error_code = ErrorCode.LOCALE_UNSUPPORTED

    def __init__(self, culture: str, supported: list[str] | tuple[str, ...]):
        super().__init__(
            message=f"Culture '{culture}' is not supported",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"culture": culture, "supported": list(supported)},
        )


# ============================================================================
# Startup Exceptions
# ============================================================================


class ConfigurationError(LocalizerError):
    """Raised at startup when the localization settings are inconsistent"""

    error_code = ErrorCode.CONFIGURATION_ERROR

    def __init__(self, message: str, setting: str | None = None):
        details = {"setting": setting} if setting else {}
        super().__init__(message=message, details=details)
