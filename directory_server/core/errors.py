# directory_server/core/errors.py
from fastapi import status


class DirectoryError(Exception):
    """Base error rendered to the caller as {"error": message}"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DirectoryError):
    """Submitted fields failed a presence or format check"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body"


class ConflictError(DirectoryError):
    """Write would break the email uniqueness constraint"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already exists"


class NotFoundError(DirectoryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Employee not found"


class StoreError(DirectoryError):
    """Unexpected persistence failure. The message is always generic."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error"
