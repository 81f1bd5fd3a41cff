"""
Errors - Exceptions raised by stores, protocols and the client.

All library errors derive from PassportError so callers can catch one type.
"""

from typing import Dict, Any, Optional


class PassportError(Exception):
    """Base class for local-passport errors."""


class ValidationError(PassportError):
    """
    A record failed validation in a store.

    Mirrors the ORM convention of a machine-readable code plus the
    attributes that were rejected, so callers can pick a flash message.
    """

    code = "E_VALIDATION"

    def __init__(self, message: str, invalid_attributes: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.invalid_attributes: Dict[str, Any] = invalid_attributes or {}

    def __repr__(self) -> str:
        return f"ValidationError({str(self)!r}, invalid_attributes={self.invalid_attributes!r})"


class MissingFieldError(PassportError):
    """A required request parameter was not supplied."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class AuthenticationError(PassportError):
    """Authentication could not be performed."""


class NotAuthenticatedError(AuthenticationError):
    """The operation requires a signed-in user."""
