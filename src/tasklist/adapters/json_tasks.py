"""JSON task repository - serializes the task collection into a blob store."""

import json
import logging

from tasklist.core.tasks import Task
from tasklist.errors import StorageError
from tasklist.ports.blob_store import BlobStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "tasks"


class JsonTaskRepository:
    """
    Task repository backed by a single JSON document.

    Implements TaskRepository protocol. The whole collection is stored under
    one key as a JSON array; every save replaces it.
    """

    def __init__(self, store: BlobStore, key: str = STORAGE_KEY):
        self.store = store
        self.key = key

    def load(self) -> list[Task]:
        """Load all tasks. Unreadable records are skipped with a warning."""
        raw = self.store.get(self.key)
        if raw is None or not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Stored tasks under {self.key!r} are not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Stored tasks under {self.key!r} are not a list")

        tasks = []
        seen_ids = set()
        for item in data:
            try:
                task = Task.from_dict(item)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping unreadable task record {item!r}: {e}")
                continue
            if task.id in seen_ids:
                logger.warning(f"Skipping duplicate task id {task.id}")
                continue
            seen_ids.add(task.id)
            tasks.append(task)

        logger.debug(f"Loaded {len(tasks)} tasks from {self.key!r}")
        return tasks

    def save(self, tasks: list[Task]) -> None:
        """Replace the stored collection with tasks."""
        payload = json.dumps([t.to_dict() for t in tasks], indent=2, ensure_ascii=False)
        self.store.set(self.key, payload)
        logger.debug(f"Saved {len(tasks)} tasks to {self.key!r}")
