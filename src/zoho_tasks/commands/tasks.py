"""Task commands: list, get, add, update and delete Zoho CRM tasks."""

from typing import Any, Optional

import typer

from zoho_tasks.api.client import get_client
from zoho_tasks.api.tasks import TasksAPI
from zoho_tasks.models.task import (
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    parse_fields,
)
from zoho_tasks.utils.typer_helpers import SuggestingGroup
from zoho_tasks.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")

STATUS_HELP = "Not Started, In Progress or Completed"
PRIORITY_HELP = "High, Normal or Low"


def _options(**values: Any) -> dict[str, Any]:
    """Keep only the options the user actually passed."""
    return {key: value for key, value in values.items() if value is not None}


@app.command("list")
@command_wrapper
async def list_tasks(
    page: Optional[int] = typer.Option(None, "--page", min=1, help="Page number"),
    per_page: Optional[int] = typer.Option(
        None, "--per-page", min=1, max=200, help="Records per page"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format (table/json)"),
) -> None:
    """List tasks in the order Zoho CRM returns them."""
    client = get_client()
    try:
        result = await TasksAPI(client).list_tasks(page=page, per_page=per_page)
    finally:
        await client.close()

    tasks = [Task.from_zoho(record).to_display() for record in result["data"]]
    format_output(tasks, output)
    if output != "json" and result["info"].get("more_records"):
        format_info("More tasks available, use --page to see them")


@app.command("get")
@command_wrapper
async def get_task(
    task_id: str = typer.Argument(..., help="Zoho task ID"),
    output: str = typer.Option("table", "--output", "-o", help="Output format (table/json)"),
) -> None:
    """Show one task."""
    client = get_client()
    try:
        record = await TasksAPI(client).get_task(task_id)
    finally:
        await client.close()
    format_output(Task.from_zoho(record).to_display(), output)


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task subject"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help=STATUS_HELP),
    priority: Optional[TaskPriority] = typer.Option(
        None, "--priority", "-p", help=PRIORITY_HELP
    ),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Description"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD)"),
    assignee: Optional[str] = typer.Option(None, "--assignee", "-a", help="Zoho user ID"),
) -> None:
    """Create a task."""
    fields = parse_fields(
        TaskCreate,
        _options(
            title=title,
            status=status,
            priority=priority,
            notes=notes,
            due_date=due,
            assignee=assignee,
        ),
    )

    client = get_client()
    try:
        task_id = await TasksAPI(client).create_task(fields.to_zoho())
    finally:
        await client.close()
    format_success(f"Task created: {task_id}")


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Zoho task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New subject"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help=STATUS_HELP),
    priority: Optional[TaskPriority] = typer.Option(
        None, "--priority", "-p", help=PRIORITY_HELP
    ),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Description"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD)"),
    assignee: Optional[str] = typer.Option(None, "--assignee", "-a", help="Zoho user ID"),
) -> None:
    """Change the given fields of a task, leaving the rest alone."""
    fields = parse_fields(
        TaskUpdate,
        _options(
            title=title,
            status=status,
            priority=priority,
            notes=notes,
            due_date=due,
            assignee=assignee,
        ),
    )

    client = get_client()
    try:
        await TasksAPI(client).update_task(task_id, fields.to_zoho())
    finally:
        await client.close()
    format_success(f"Task updated: {task_id} ({', '.join(sorted(fields.model_fields_set))})")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Zoho task ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    if not force:
        confirm = typer.confirm(f"Delete task {task_id}?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    client = get_client()
    try:
        await TasksAPI(client).delete_task(task_id)
    finally:
        await client.close()
    format_success(f"Task deleted: {task_id}")
