"""
Hostman exceptions and error handling utilities.

Every failure a sync cycle or a service request can hit is expressed as a
``HostmanError`` subclass so that the command line and the HTTP service can
report it in one place.
"""

from __future__ import annotations

import logging
import traceback
from typing import Optional, Any, Dict


class HostmanError(Exception):
    """Base exception for all Hostman-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MalformedLine(HostmanError):
    """Raised when a single line matches neither the comment nor the mapping grammar."""

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(reason, details)
        self.reason = reason


class ParseError(HostmanError):
    """Raised when a hosts file cannot be parsed.

    ``line_number`` is 1-based; ``0`` means the file could not be read at all.
    """

    def __init__(
        self,
        line_number: int,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        if line_number:
            message = f"line {line_number}: {reason}"
        else:
            message = reason
        error_details = {"line_number": line_number}
        error_details.update(details or {})
        super().__init__(message, error_details)
        self.line_number = line_number
        self.reason = reason


class RegionError(HostmanError):
    """Raised when the managed-region sentinels are present but out of order."""

    pass


class NetworkError(HostmanError):
    """Raised when a request to the hostman service fails."""

    pass


class PersistenceError(HostmanError):
    """Raised when the service's backing store cannot be read or written."""

    pass


class WriteError(HostmanError):
    """Raised when the hosts file or its backup cannot be written."""

    pass


class ConfigError(HostmanError):
    """Raised when a configuration value is invalid."""

    pass


class ErrorHandler:
    """Centralized error handling utilities."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def log_and_raise(
        self,
        exception_class: type[HostmanError],
        message: str,
        original_error: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an error and raise a Hostman exception chained to ``original_error``."""
        error_details = details or {}

        if original_error:
            error_details["original_error"] = str(original_error)
            error_details["original_type"] = type(original_error).__name__

        self.logger.error(f"❌ {message}")
        if original_error:
            self.logger.debug(f"Original error: {original_error}")
            self.logger.debug(f"Traceback: {traceback.format_exc()}")

        raise exception_class(message, error_details) from original_error


def format_error_message(error: Exception, include_traceback: bool = False) -> str:
    """Format error messages consistently."""
    if isinstance(error, HostmanError):
        message = f"{type(error).__name__}: {error.message}"
        extra = {k: v for k, v in error.details.items() if k != "line_number"}
        if extra:
            details = ", ".join(f"{k}={v}" for k, v in extra.items())
            message += f" ({details})"
    else:
        message = f"{type(error).__name__}: {str(error)}"

    if include_traceback:
        message += f"\n{traceback.format_exc()}"

    return message
