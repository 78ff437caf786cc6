"""
Exception types raised by the task store and mapped to HTTP responses by the app.
"""
from typing import Any, Dict, List


class TaskManagerError(Exception):
    """Base class for every error the task store raises."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(TaskManagerError):
    """One or more fields of a task violate the schema.

    ``errors`` holds one entry per violated rule, each with the offending
    field under ``path`` and a human readable ``msg``.
    """

    status_code = 400

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__("; ".join(error["msg"] for error in errors) or "Invalid task")
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class NotFoundError(TaskManagerError):
    status_code = 404

    def __init__(self, task_id: Any = None):
        super().__init__("Task not found")
        self.task_id = task_id


class StoreError(TaskManagerError):
    """The underlying database operation failed."""
