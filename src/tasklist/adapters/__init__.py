"""Adapters - I/O implementations of ports."""

from .file_blob_store import FileBlobStore
from .memory_blob_store import MemoryBlobStore
from .json_tasks import JsonTaskRepository, STORAGE_KEY

__all__ = [
    "FileBlobStore",
    "MemoryBlobStore",
    "JsonTaskRepository",
    "STORAGE_KEY",
]
