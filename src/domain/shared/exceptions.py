"""
Domain Layer Exceptions

This module defines the exception hierarchy raised by the Domain Layer.
All domain-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - Type-safe error handling across layers
    - Clear separation from framework and store exceptions

Architecture Notes:
    - Part of Shared Domain (used across all subdomains)
    - Store failures are NOT domain errors (see src.application.exceptions)
    - "No zones configured" is not an error at all; it is a regular response
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    Usage:
        - Catch this in Application Layer to handle all domain errors
        - API Layer converts to appropriate HTTP status codes
        - Infrastructure Layer should not raise DomainException (use own exceptions)

    Examples:
        >>> raise DomainException("Business rule violation")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidCoordinateError(DomainException):
    """
    Raised when a query coordinate cannot be used for matching.

    This is the only hard-reject case of the matching pipeline. It is raised
    before any store access takes place:
    - latitude missing, not numeric, or outside [-90, 90]
    - longitude missing, not numeric, or outside [-180, 180]

    Attributes:
        field: Name of the violated request field ("latitude" or "longitude")
        original_value: The raw value received (optional)

    Examples:
        >>> raise InvalidCoordinateError("A valid latitude is required", field="latitude")
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        original_value: Any = None,
    ) -> None:
        """
        Initialize coordinate validation error.

        Args:
            message: Error description
            field: Request field that failed validation (optional)
            original_value: Raw input value that caused the error (optional)
        """
        self.field = field
        self.original_value = original_value
        super().__init__(message)
