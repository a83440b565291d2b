"""
Authentication Errors

Business-rule failures raised by the use cases. Each carries an Error value
(code + client-safe message) that the API layer maps to an HTTP response.
Infrastructure failures are never wrapped in these classes.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Error:
    code: str
    message: str


class AuthError(Exception):
    """Base class for expected authentication failures"""

    code = "AUTH_ERROR"

    def __init__(self, message: str):
        self.error = Error(self.code, message)
        super().__init__(message)


class ValidationError(AuthError):
    """Malformed or missing input"""

    code = "VALIDATION_ERROR"


class UnauthorizedError(AuthError):
    """Bad credentials, unusable refresh token or deactivated account"""

    code = "UNAUTHORIZED"


class InvalidTokenError(UnauthorizedError):
    """Access token with a bad signature, missing claims or past its expiry"""

    code = "INVALID_TOKEN"


class AccountLockedError(AuthError):
    """User exceeded the failed login threshold"""

    code = "ACCOUNT_LOCKED"


class ForbiddenError(AuthError):
    """Authenticated principal type is not allowed in this flow"""

    code = "FORBIDDEN"


class NotFoundError(AuthError):
    code = "NOT_FOUND"
