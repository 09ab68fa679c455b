from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ContractViolation(ValidationError):
    """Raised when a required field of an event or policy is absent or malformed."""


class OutOfPerimeter(DomainError):
    """Raised when a clock-in is attempted outside the organization's perimeter.

    This is a business rejection shown to the end user, not a system fault.
    """

    def __init__(self, distance_meters: float, radius_meters: float, message: str | None = None):
        super().__init__(message or "You are outside the allowed perimeter for clocking in")
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
