"""
Exception hierarchy for the Task Manager service.

Each error kind maps to exactly one HTTP status code. Handlers catch these
at the request boundary and turn them into ``{"error": message}`` bodies.
"""

from __future__ import annotations


class TaskManagerError(Exception):
    """Base class for every error raised by this package."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskManagerError):
    """Malformed request input: bad JSON, bad field values or bad path id."""

    status_code = 400


class TaskNotFoundError(TaskManagerError):
    """The requested task does not exist or has been deleted."""

    status_code = 404

    def __init__(self, task_id: int) -> None:
        super().__init__("Task not found")
        self.task_id = task_id


class StorageError(TaskManagerError):
    """The database rejected or failed an operation."""

    status_code = 500


class ClientError(TaskManagerError):
    """
    Raised by :class:`taskmanager.client.TaskClient` for failed API calls.

    Attributes:
        status_code: HTTP status returned by the service, or ``None`` when
            the service could not be reached at all.
        message: Error message from the response body or transport.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
