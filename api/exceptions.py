"""
Base exception classes for the bookstore backend.

Services raise these; ``api.middleware`` turns them into JSON responses
with the matching HTTP status. Module-specific errors subclass them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class BookstoreError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(BookstoreError):
    """Input was well-formed but not acceptable."""

    status_code = 400


class UnauthorizedError(BookstoreError):
    """Authentication failed (bad credentials, bad or expired token)."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", code: Optional[str] = None):
        super().__init__(message, code=code or "UNAUTHORIZED")


class NotFoundError(BookstoreError):
    """Resource not found."""

    status_code = 404


class ConflictError(BookstoreError):
    """Resource already exists."""

    status_code = 409


class ExternalServiceError(BookstoreError):
    """Error communicating with an external service."""

    status_code = 502

    def __init__(self, message: str, service: str):
        super().__init__(message, details={"service": service})
        self.service = service


class ServiceUnavailableError(BookstoreError):
    """A feature is disabled because its configuration is missing."""

    status_code = 503
