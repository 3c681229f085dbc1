"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class ConflictError(AppError):
    """Raised when an action collides with one that is still in flight."""

    def __init__(self, message="Another request is already in progress."):
        """Initialize the error."""
        super().__init__(message, 409)


class UpstreamError(AppError):
    """Raised when a Firebase call failed and the action can be repeated."""

    def __init__(self, message="The backend could not complete the request."):
        """Initialize the error."""
        super().__init__(message, 502)
