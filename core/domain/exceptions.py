"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""
from typing import Dict, Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license record is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="NOT_FOUND")


class DuplicateLicenseKeyError(LicenseException):
    """Raised when a license key is already used by another record."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DUPLICATE_KEY")


class InvalidLicenseIdError(LicenseException):
    """Raised when a license id is malformed."""

    def __init__(self, message: str = "Invalid license id"):
        super().__init__(message, code="INVALID_ID")


class InvalidInputError(DomainException):
    """Raised when request fields fail validation."""

    def __init__(
        self,
        message: str = "Invalid input",
        fields: Optional[Dict] = None,
    ):
        super().__init__(message, code="INVALID_INPUT")
        self.fields = fields or {}


class BindingConflictError(LicenseException):
    """Raised when a device binding keeps losing concurrent updates."""

    def __init__(self, message: str = "License record changed during validation"):
        super().__init__(message, code="INTERNAL_ERROR")


class AuthorizationException(DomainException):
    """Base exception for admin authorization errors."""

    pass


class UnauthorizedError(AuthorizationException):
    """Raised when the admin secret is missing or wrong."""

    def __init__(self, message: str = "Unauthorized: Incorrect admin password"):
        super().__init__(message, code="UNAUTHORIZED")

