class FinanceTrackerError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FinanceTrackerError):
    """Missing or malformed field, identifier or month."""

    status_code = 400


class NotFoundError(FinanceTrackerError):
    status_code = 404


class ConflictError(FinanceTrackerError):
    """A budget already exists for the category and month."""

    status_code = 409


class InternalError(FinanceTrackerError):
    """Unexpected store or runtime failure, reported with a generic message."""

    status_code = 500
