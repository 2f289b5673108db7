from __future__ import annotations


class TodoError(Exception):
    """Base class for every error surfaced to the command line."""


class StorageError(TodoError):
    """Reading or writing the task file failed."""

    def __init__(self, exc: Exception) -> None:
        super().__init__(f"IO error: {exc}")


class MalformedDocumentError(TodoError):
    """The task file exists but does not hold a valid task document."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"JSON error: {detail}")


class TaskNotFoundError(TodoError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id
