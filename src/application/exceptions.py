"""
Application Layer Exceptions

Errors raised at the boundary between the use cases and the stores they
depend on. Domain rule violations live in src.domain.shared.exceptions.
"""

from typing import Optional


class UpstreamStoreError(Exception):
    """
    Raised when a zone or service store cannot be read.

    Store adapters wrap backend failures (connection errors, undecodable
    records) in this exception. The geo matching use case never catches it;
    the API layer maps it to 502.

    Attributes:
        message: Human-readable error message
        store: Name of the failing store ("zones", "services")
        original_error: Backend exception that caused the failure

    Examples:
        >>> raise UpstreamStoreError(
        ...     "Cannot list zones", store="zones", original_error=ConnectionError()
        ... )
    """

    def __init__(
        self,
        message: str,
        store: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.message = message
        self.store = store
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        if self.store:
            return f"{self.__class__.__name__} [{self.store}]: {self.message}"
        return f"{self.__class__.__name__}: {self.message}"
