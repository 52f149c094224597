"""Derived views over the task collection - pure functions, no I/O."""

from .filters import FilterState, filter_tasks
from .sorting import SortMode, sort_tasks
from .tasks import Task


def unique_categories(tasks: list[Task]) -> list[str]:
    """Distinct non-blank categories, trimmed, in first-seen order."""
    seen: dict[str, None] = {}
    for task in tasks:
        if not task.category:
            continue
        category = task.category.strip()
        if category:
            seen.setdefault(category, None)
    return list(seen)


def compose_view(
    tasks: list[Task],
    filters: FilterState | None = None,
    sort_mode: SortMode | str | None = SortMode.CREATED,
) -> list[Task]:
    """
    Filter, then sort, the full collection.

    Pure function - no I/O. Recomputed from scratch on every call.
    """
    filters = filters or FilterState()
    return sort_tasks(filter_tasks(tasks, filters), sort_mode)


def task_id_at(view: list[Task], index: int) -> str:
    """Id of the task shown at a position in a derived view."""
    if index < 0 or index >= len(view):
        raise IndexError(f"No task at position {index} (view has {len(view)})")
    return view[index].id
