"""
Error hierarchy - every client-visible failure carries its HTTP status and message.
Challenge: Keep the exact error strings of the public contract in one place.
"""


class UserApiError(Exception):
    """Base exception. Rendered as {"error": message} by the global handler."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.message}


class InvalidContentTypeError(UserApiError):
    http_status = 400

    def __init__(self, message: str = "Invalid content type. Only application/json is accepted"):
        super().__init__(message)


class InvalidRequestBodyError(UserApiError):
    http_status = 400

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message)


class MissingFieldsError(UserApiError):
    http_status = 400

    def __init__(self, message: str = "All fields are required"):
        super().__init__(message)


class UserCreateFailedError(UserApiError):
    http_status = 400

    def __init__(self, message: str = "Failed to create user"):
        super().__init__(message)


class NotFoundError(UserApiError):
    """No live (non-deleted) row matches the requested id."""

    http_status = 404


class ConflictError(UserApiError):
    """Unique constraint violated (duplicate email among live rows)."""

    http_status = 409


class DatabaseUnavailableError(UserApiError):
    """Datastore could not be opened or its schema reconciled. Fatal at startup."""


class FrontendUnavailableError(UserApiError):
    """Static HTML page is missing or unreadable. Fatal at startup."""
