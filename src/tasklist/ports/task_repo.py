"""Task repository interface."""

from typing import Protocol

from tasklist.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for loading and saving the full task collection."""

    def load(self) -> list[Task]:
        """Load all tasks. Empty list if nothing was saved yet."""
        ...

    def save(self, tasks: list[Task]) -> None:
        """Replace the stored collection with tasks."""
        ...
