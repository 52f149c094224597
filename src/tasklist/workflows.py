"""Wiring between config, storage adapters and the store."""

from .adapters.file_blob_store import FileBlobStore
from .adapters.json_tasks import JsonTaskRepository
from .config import Config
from .store import TaskStore, TaskView


def get_repository(config: Config) -> JsonTaskRepository:
    """Resolve the task repository from config."""
    return JsonTaskRepository(FileBlobStore(config.data_path), key=config.storage_key)


def open_store(config: Config) -> TaskStore:
    """Create the store and load the saved collection."""
    store = TaskStore(get_repository(config))
    store.load()
    return store


def open_view(store: TaskStore, config: Config) -> TaskView:
    """View with the configured default sort and completion filter."""
    view = TaskView(store, sort_mode=config.default_sort)
    view.update_filters(show_completed=config.show_completed)
    return view
