"""Custom exceptions for the radio contracts application."""

from __future__ import annotations

from typing import Any


class RadioContractsError(Exception):
    """Base exception for the radio contracts application."""

    status_code = 500
    default_message = "Internal server error."

    def __init__(self, message: str | None = None, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.errors = errors or []


class ValidationError(RadioContractsError):
    """Raised when validation fails."""

    status_code = 400
    default_message = "Invalid data."


class NotFoundError(RadioContractsError):
    """Raised when a resource is not found."""

    status_code = 404
    default_message = "Resource not found."


class ConflictError(RadioContractsError):
    """Raised when a uniqueness rule is violated."""

    status_code = 409
    default_message = "Resource already exists."


class InvalidStateError(RadioContractsError):
    """Raised when a lifecycle transition is not allowed."""

    status_code = 400
    default_message = "Operation not allowed in the current state."


class InternalError(RadioContractsError):
    """Raised when an unexpected failure must surface as a generic error."""


class ConfigurationError(RadioContractsError):
    """Raised when configuration is invalid."""


class AuthenticationError(RadioContractsError):
    """Raised when authentication fails."""

    status_code = 401
    default_message = "Authentication required."


class UnauthenticatedError(AuthenticationError):
    """Raised when the request carries no usable bearer token."""

    default_message = "Access token is required."


class InvalidTokenError(AuthenticationError):
    """Raised when a token fails signature, expiry or claim checks."""

    default_message = "Invalid token."


class InactiveOrUnknownUserError(AuthenticationError):
    """Raised when a valid token points at a missing or deactivated user."""

    default_message = "User not found or inactive."


class InvalidCredentialsError(AuthenticationError):
    """Raised when username/password verification fails."""

    default_message = "Invalid credentials."


class AuthorizationError(RadioContractsError):
    """Raised when an authenticated identity lacks permission."""

    status_code = 403
    default_message = "Access denied. Insufficient permissions."
