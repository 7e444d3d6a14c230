"""
Centralized error handling module for statize.

This module defines the root of the exception hierarchy used across the
package. Every error carries an optional error code and a context dictionary
so that callers can log or inspect failures without parsing messages.
"""

from typing import Any, Dict, Optional


class BaseError(Exception):
    """Base class for all custom exceptions in the package."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize the BaseError.

        Args:
            message: The primary error message.
            error_code: A unique code for this error type (e.g., 'CONFIG_001').
            context: A dictionary of contextual information related to the error.
            original_exception: The original exception that was caught and wrapped.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        """Create a string representation of the error."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}]")
        parts.append(self.message)

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"Context: ({context_str})")

        if self.original_exception:
            parts.append(
                f"--> Caused by: {type(self.original_exception).__name__}: {self.original_exception}"
            )

        return " ".join(parts)


class StatizeError(BaseError):
    """Base exception class for all statize errors."""

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message or "An error occurred in a stateful object",
            error_code=error_code,
            context=context,
            original_exception=original_exception,
        )


class ConfigurationError(StatizeError):
    """Error raised while declaring a state profile."""

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        error_code: str = "CONFIG_001",
    ):
        super().__init__(
            message or "Invalid state profile configuration",
            error_code=error_code,
            context=context,
            original_exception=original_exception,
        )
