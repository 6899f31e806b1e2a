"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error, flashed to the admin or rendered as an error page."""

    flash_category = "danger"

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def to_dict(self):
        """Serialize the error for JSON endpoints."""
        return {"status": "error", "message": self.message}


class ValidationError(AppError):
    """Raised when admin input fails a service precondition."""

    flash_category = "warning"

    def __init__(self, message="Invalid data."):
        """Initialize the error."""
        super().__init__(message, 400)


class DuplicateResourceError(AppError):
    """Raised when an entry would appear twice, e.g. a team twice in one poule."""

    flash_category = "warning"

    def __init__(self, message="This entry already exists."):
        """Initialize the error."""
        super().__init__(message, 409)


class NotFoundError(AppError):
    """Raised when a draft document targeted by an admin edit is missing."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)
