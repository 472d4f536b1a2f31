"""
Failure taxonomy for user operations.

Every exception here knows the HTTP status it maps to; the handlers in
utils.error_handling turn them into responses.
"""

from typing import Optional

# Messages used when the operation could not even get a connection
ACTION_MESSAGES = {
    "fetch": "Error fetching users",
    "add": "Error adding user",
    "update": "Error updating user",
    "delete": "Error deleting user",
}


class UserError(Exception):
    """Base class for failures surfaced to API callers"""

    status_code: int = 500
    error_type: str = "USER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(UserError):
    status_code = 404
    error_type = "NOT_FOUND"

    def __init__(self):
        super().__init__("User not found")


class StorageFailure(UserError):
    """Wraps an error raised by the database driver"""

    status_code = 500
    error_type = "DATABASE_ERROR"

    def __init__(self, original: Exception):
        super().__init__(f"Database error: {original}")
        self.original = original


class InvalidUserId(UserError):
    status_code = 400
    error_type = "INVALID_USER_ID"

    def __init__(self, raw_value: str, reason: Optional[str] = None):
        super().__init__(f"Invalid user id: {raw_value}")
        self.raw_value = raw_value
        self.reason = reason


class DispatchFailure(UserError):
    """The operation could not be run at all (no connection available)"""

    status_code = 500
    error_type = "DISPATCH_ERROR"

    def __init__(self, action: str):
        super().__init__(ACTION_MESSAGES.get(action, f"Error running '{action}'"))
        self.action = action
