"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class PawPlanError(Exception):
    """Base exception for pawplan."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PawPlanError):
    """Resource not found."""

    pass


class ValidationError(PawPlanError):
    """Form input rejected before reaching storage.

    ``details`` holds a mapping of field name to human-readable message.
    """

    def __init__(self, message: str, field_errors: Optional[dict[str, str]] = None):
        super().__init__(message, details=dict(field_errors or {}))

    @property
    def field_errors(self) -> dict[str, str]:
        return self.details


class StorageError(PawPlanError):
    """Persistence backend failure (connection, rejected write, timeout)."""

    pass


class AuthenticationError(PawPlanError):
    """Authentication failed."""

    pass
