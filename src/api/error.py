from fastapi import status
from src.app.errors import (
    AccountLockedError,
    AuthError,
    Error,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

# Checked in order, so subclasses must precede their bases
STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (AccountLockedError, status.HTTP_423_LOCKED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
)


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


def to_client_error(exc: AuthError) -> ClientError:
    """Map a business error to the HTTP status the transport reports for it"""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return ClientError(exc.error, status_code=status_code)
    return ClientError(exc.error)
