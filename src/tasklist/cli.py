"""tasklist CLI - a personal to-do list."""

import json
import logging
import sys

import click

from . import __version__
from .config import load_config
from .core.display import format_stats, format_task_line
from .core.filters import ALL
from .core.sorting import SortMode
from .core.tasks import PRIORITIES, SUGGESTED_CATEGORIES, TaskDraft
from .errors import TaskNotFoundError, ValidationError
from .store import TaskStore
from .workflows import open_store, open_view

SORT_CHOICES = [m.value for m in SortMode]


def _warn_if_unsaved(store: TaskStore) -> None:
    if store.last_storage_error:
        click.echo(f"Warning: {store.last_storage_error}", err=True)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load():
    config = load_config()
    store = open_store(config)
    _warn_if_unsaved(store)
    return config, store


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """tasklist - a personal to-do list."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("text")
@click.option("--description", "-d", default="", help="Extra details")
@click.option("--category", "-c", default=None, help=f"Category, e.g. {', '.join(SUGGESTED_CATEGORIES)}")
@click.option("--priority", "-p", type=click.Choice(PRIORITIES), default="low", show_default=True)
@click.option("--due", default=None, help="Due date (ISO-8601, e.g. 2025-01-20 or 2025-01-20T17:00)")
def add(text: str, description: str, category: str | None, priority: str, due: str | None):
    """Add a task."""
    _, store = _load()
    draft = TaskDraft(text=text, description=description, category=category, priority=priority, due_date=due)
    try:
        task = store.add(draft)
    except ValidationError as e:
        _fail(str(e))

    click.echo(f"Added #{task.id}: {task.text}")
    _warn_if_unsaved(store)


@main.command("list")
@click.option("--search", "-s", default="", help="Match text or description (case-insensitive)")
@click.option("--category", "-c", default=ALL, show_default=True, help="Only this category")
@click.option("--priority", "-p", type=click.Choice([ALL, *PRIORITIES]), default=ALL, show_default=True)
@click.option("--hide-completed", is_flag=True, help="Hide completed tasks")
@click.option("--show-completed", is_flag=True, help="Show completed tasks even if hidden in config")
@click.option("--sort", "sort_mode", type=click.Choice(SORT_CHOICES), default=None, help="Sort order")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(
    search: str,
    category: str,
    priority: str,
    hide_completed: bool,
    show_completed: bool,
    sort_mode: str | None,
    as_json: bool,
):
    """List tasks, filtered and sorted."""
    config, store = _load()
    view = open_view(store, config)
    if sort_mode:
        view.set_sort_mode(sort_mode)

    completed_visible = view.filters.show_completed
    if show_completed:
        completed_visible = True
    if hide_completed:
        completed_visible = False

    items = view.update_filters(
        search_query=search,
        selected_category=category,
        selected_priority=priority,
        show_completed=completed_visible,
    )

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in items], indent=2, ensure_ascii=False))
        return

    if not items:
        click.echo("No tasks." if not len(store) else "No tasks match the current filters.")
        return

    for task in items:
        click.echo(format_task_line(task, date_format=config.date_format))


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Toggle a task between done and not done."""
    _, store = _load()
    try:
        task = store.toggle(task_id)
    except TaskNotFoundError as e:
        _fail(str(e))

    state = "done" if task.done else "not done"
    click.echo(f"Marked #{task.id} {state}: {task.text}")
    _warn_if_unsaved(store)


@main.command()
@click.argument("task_id")
@click.option("--text", "-t", default=None, help="New title")
@click.option("--description", "-d", default=None, help="New description")
@click.option("--category", "-c", default=None, help="New category (empty string clears it)")
@click.option("--priority", "-p", type=click.Choice(PRIORITIES), default=None)
@click.option("--due", default=None, help="New due date (ISO-8601)")
@click.option("--clear-due", is_flag=True, help="Remove the due date")
def edit(
    task_id: str,
    text: str | None,
    description: str | None,
    category: str | None,
    priority: str | None,
    due: str | None,
    clear_due: bool,
):
    """Edit a task. Options left out keep their current value."""
    _, store = _load()
    try:
        current = store.get_task(task_id)
        if clear_due:
            due_date = None
        elif due is not None:
            due_date = due
        else:
            due_date = current.due_date
        draft = TaskDraft(
            text=current.text if text is None else text,
            description=current.description if description is None else description,
            category=current.category if category is None else category,
            priority=priority or current.priority,
            due_date=due_date,
        )
        task = store.edit(task_id, draft)
    except (TaskNotFoundError, ValidationError) as e:
        _fail(str(e))

    click.echo(f"Updated #{task.id}: {task.text}")
    _warn_if_unsaved(store)


@main.command()
@click.argument("task_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def delete(task_id: str, yes: bool):
    """Delete a task."""
    _, store = _load()
    try:
        task = store.get_task(task_id)
    except TaskNotFoundError as e:
        _fail(str(e))

    if not yes and not click.confirm(f"Delete '{task.text}'?"):
        return

    store.delete(task_id)
    click.echo(f"Deleted #{task.id}: {task.text}")
    _warn_if_unsaved(store)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool):
    """Show completion statistics."""
    config, store = _load()
    summary = open_view(store, config).stats()

    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
    else:
        click.echo(format_stats(summary))


@main.command()
def categories():
    """List the categories in use."""
    config, store = _load()
    found = open_view(store, config).categories()

    if not found:
        click.echo("No categories yet.")
        click.echo(f"Suggestions: {', '.join(SUGGESTED_CATEGORIES)}")
        return

    for category in found:
        click.echo(category)


if __name__ == "__main__":
    main()
