from typing import Optional


class TaskListError(Exception):
    """Base error for task store operations; carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidArgument(TaskListError):
    """Raised for an empty title, a malformed id or a body of the wrong shape."""

    status_code = 400


class NotFound(TaskListError):
    """Raised when an id does not reference a stored task."""

    status_code = 404


class MethodNotAllowed(TaskListError):
    status_code = 405


class StorageError(TaskListError):
    """Raised when the persistence layer fails (constraint violation, lost connection)."""

    status_code = 500


_BY_STATUS = {
    InvalidArgument.status_code: InvalidArgument,
    NotFound.status_code: NotFound,
    MethodNotAllowed.status_code: MethodNotAllowed,
}


def error_for_status(status_code: int, message: str) -> TaskListError:
    """Map an HTTP status back onto an error kind (unknown statuses become StorageError)."""

    return _BY_STATUS.get(status_code, StorageError)(message)
