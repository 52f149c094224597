"""In-memory task store and the derived view that follows it.

TaskStore owns the canonical collection: every mutation replaces the
snapshot, saves the full collection through the repository, then notifies
subscribers. TaskView holds filter/sort state and recomputes the derived
list whenever the store or its own state changes.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable

from .core.filters import FilterState
from .core.sorting import SortMode
from .core.stats import TaskStats, compute_stats
from .core.tasks import Task, TaskDraft, apply_edit, create_task, new_task_id, utcnow
from .core.views import compose_view, task_id_at, unique_categories
from .errors import StorageError, TaskNotFoundError, ValidationError
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)

Listener = Callable[[list[Task]], None]


class TaskStore:
    """Single source of truth for the task collection."""

    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self._clock = clock
        self._tasks: list[Task] = []
        self._listeners: list[Listener] = []
        self.last_storage_error: StorageError | None = None

    # ============== get / set / subscribe ==============

    def get(self) -> list[Task]:
        """Current snapshot (a copy; mutate through the store)."""
        return list(self._tasks)

    def get_task(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def set(self, tasks: list[Task]) -> None:
        """Replace the whole collection, save it and notify subscribers."""
        ids = [t.id for t in tasks]
        if len(ids) != len(set(ids)):
            raise ValidationError("Task ids must be unique")
        self._commit(list(tasks))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with the new snapshot after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._tasks)

    # ============== Persistence ==============

    def load(self) -> list[Task]:
        """Load the collection once at startup. A failed load leaves it empty."""
        try:
            tasks = self.repository.load()
        except StorageError as e:
            logger.warning(f"Failed to load tasks, starting empty: {e}")
            self.last_storage_error = e
            tasks = []
        self._tasks = tasks
        self._notify()
        return self.get()

    def _save(self) -> bool:
        try:
            self.repository.save(self._tasks)
        except StorageError as e:
            logger.warning(f"Failed to save tasks (kept in memory): {e}")
            self.last_storage_error = e
            return False
        self.last_storage_error = None
        return True

    def _commit(self, tasks: list[Task]) -> None:
        self._tasks = tasks
        self._save()
        self._notify()

    def _notify(self) -> None:
        snapshot = self.get()
        for listener in list(self._listeners):
            listener(snapshot)

    # ============== Mutations (by id) ==============

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def _unused_id(self, now: datetime) -> str:
        existing = {t.id for t in self._tasks}
        task_id = new_task_id(now)
        while task_id in existing:
            task_id = new_task_id(now)
        return task_id

    def add(self, draft: TaskDraft) -> Task:
        """Normalize the draft and append it. Raises ValidationError."""
        now = self._clock()
        task = create_task(draft, task_id=self._unused_id(now), now=now)
        self._commit([*self._tasks, task])
        logger.debug(f"Added task {task.id}")
        return task

    def edit(self, task_id: str, draft: TaskDraft) -> Task:
        """Replace the editable fields of a task. Raises ValidationError or TaskNotFoundError."""
        index = self._index_of(task_id)
        updated = apply_edit(self._tasks[index], draft, now=self._clock())
        tasks = list(self._tasks)
        tasks[index] = updated
        self._commit(tasks)
        logger.debug(f"Edited task {task_id}")
        return updated

    def toggle(self, task_id: str) -> Task:
        """Flip the done flag of a task."""
        index = self._index_of(task_id)
        updated = self._tasks[index].toggled(now=self._clock())
        tasks = list(self._tasks)
        tasks[index] = updated
        self._commit(tasks)
        logger.debug(f"Toggled task {task_id} (done={updated.done})")
        return updated

    def delete(self, task_id: str) -> Task:
        """Remove a task from the collection."""
        removed = self._tasks[self._index_of(task_id)]
        self._commit([t for t in self._tasks if t.id != task_id])
        logger.debug(f"Deleted task {task_id}")
        return removed


class TaskView:
    """
    Filtered and sorted view of a TaskStore.

    Positional operations resolve the position to a task id in this view,
    then act on the store by id.
    """

    def __init__(
        self,
        store: TaskStore,
        filters: FilterState | None = None,
        sort_mode: SortMode | str | None = SortMode.CREATED,
    ):
        self.store = store
        self._filters = filters or FilterState()
        self._sort_mode = SortMode.parse(sort_mode)
        self._items: list[Task] = []
        self._listeners: list[Listener] = []
        self._unsubscribe = store.subscribe(self._on_store_change)
        self._recompute()

    @property
    def items(self) -> list[Task]:
        return list(self._items)

    @property
    def filters(self) -> FilterState:
        return replace(self._filters)

    @property
    def sort_mode(self) -> SortMode:
        return self._sort_mode

    def __len__(self) -> int:
        return len(self._items)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with the derived list after every recomputation."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Stop following the store."""
        self._unsubscribe()

    # ============== Filter / sort state ==============

    def update_filters(self, **changes) -> list[Task]:
        """Change one or more FilterState fields and recompute."""
        self._filters = replace(self._filters, **changes)
        return self._recompute()

    def reset_filters(self) -> list[Task]:
        self._filters = FilterState()
        return self._recompute()

    def set_sort_mode(self, mode: SortMode | str | None) -> list[Task]:
        self._sort_mode = SortMode.parse(mode)
        return self._recompute()

    # ============== Derived data ==============

    def categories(self) -> list[str]:
        """Categories across the whole collection, not only the visible tasks."""
        return unique_categories(self.store.get())

    def stats(self, as_of: datetime | None = None) -> TaskStats:
        """Stats over the canonical (unfiltered) collection."""
        return compute_stats(self.store.get(), as_of)

    # ============== Positional mutations ==============

    def id_at(self, index: int) -> str:
        return task_id_at(self._items, index)

    def toggle_at(self, index: int) -> Task:
        return self.store.toggle(self.id_at(index))

    def delete_at(self, index: int) -> Task:
        return self.store.delete(self.id_at(index))

    def edit_at(self, index: int, draft: TaskDraft) -> Task:
        return self.store.edit(self.id_at(index), draft)

    # ============== Internals ==============

    def _on_store_change(self, tasks: list[Task]) -> None:
        self._recompute(tasks)

    def _recompute(self, tasks: list[Task] | None = None) -> list[Task]:
        if tasks is None:
            tasks = self.store.get()
        self._items = compose_view(tasks, self._filters, self._sort_mode)
        for listener in list(self._listeners):
            listener(self.items)
        return self.items
