"""Ports - interfaces/protocols for external dependencies."""

from .blob_store import BlobStore
from .task_repo import TaskRepository

__all__ = [
    "BlobStore",
    "TaskRepository",
]
