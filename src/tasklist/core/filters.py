"""Filter predicate for the task list - pure functions, no I/O."""

from dataclasses import dataclass

from .tasks import Task

ALL = "all"


@dataclass
class FilterState:
    """Active search/category/priority/completion filters."""

    search_query: str = ""
    selected_category: str = ALL
    selected_priority: str = ALL
    show_completed: bool = True


def matches_search(task: Task, query: str) -> bool:
    """Case-insensitive substring of text or description. Empty query matches."""
    needle = query.lower()
    if needle in task.text.lower():
        return True
    return bool(task.description) and needle in task.description.lower()


def matches_category(task: Task, category: str) -> bool:
    return category == ALL or task.category == category


def matches_priority(task: Task, priority: str) -> bool:
    return priority == ALL or task.priority == priority


def matches_completion(task: Task, show_completed: bool) -> bool:
    return show_completed or not task.done


def matches(task: Task, filters: FilterState) -> bool:
    """True iff the task passes every filter."""
    search_ok = matches_search(task, filters.search_query)
    category_ok = matches_category(task, filters.selected_category)
    priority_ok = matches_priority(task, filters.selected_priority)
    completion_ok = matches_completion(task, filters.show_completed)
    return search_ok and category_ok and priority_ok and completion_ok


def filter_tasks(tasks: list[Task], filters: FilterState) -> list[Task]:
    """
    Keep the tasks matching all filters, in their input order.

    Pure function - no I/O.
    """
    return [t for t in tasks if matches(t, filters)]
