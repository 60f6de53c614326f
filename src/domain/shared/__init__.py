"""
Shared Domain Module

Shared domain concepts used across all subdomains.

This module exports:
    - DomainException: Base exception for all domain errors
    - InvalidCoordinateError: Raised for unusable query coordinates
"""

from .exceptions import DomainException, InvalidCoordinateError

__all__ = [
    "DomainException",
    "InvalidCoordinateError",
]
