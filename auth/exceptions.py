"""
Authentication module exceptions.

Every ``UnauthorizedError`` subclass reaches the client as the same
generic 401 body; the specific class and message only go to the logs.
"""

from api.exceptions import UnauthorizedError, ValidationError


class InvalidCredentialsError(UnauthorizedError):
    """Unknown email, missing password hash or wrong password."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidTokenError(UnauthorizedError):
    """Raised when a bearer token is malformed or its signature is wrong."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(UnauthorizedError):
    """Raised when a bearer token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(UnauthorizedError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidProfileError(ValidationError):
    """Raised when a third-party profile cannot be mapped to a user."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_PROFILE")


class InvalidStateError(ValidationError):
    """Raised when the OAuth ``state`` parameter fails verification."""

    def __init__(self, message: str = "Invalid or expired OAuth state"):
        super().__init__(message, code="INVALID_OAUTH_STATE")
