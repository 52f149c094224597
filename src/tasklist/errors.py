"""Exceptions shared by the store, adapters and CLI."""


class ValidationError(Exception):
    """Raised when a task draft is rejected before entering the collection."""

    pass


class TaskNotFoundError(Exception):
    """Raised when no task in the collection has the requested id."""

    def __init__(self, task_id: str):
        super().__init__(f"No task with id {task_id!r}")
        self.task_id = task_id


class StorageError(Exception):
    """Raised when the persistence layer cannot load or save tasks."""

    pass
