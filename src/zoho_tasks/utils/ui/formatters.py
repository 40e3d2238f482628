"""Output formatters for different formats."""

import json
from datetime import date, datetime
from typing import Any

from rich.table import Table

from zoho_tasks.utils.ui.console import get_console

STATUS_COLORS = {
    "Not Started": "white",
    "In Progress": "bold yellow",
    "Completed": "green",
}

PRIORITY_COLORS = {
    "High": "bold red",
    "Normal": "yellow",
    "Low": "green",
}

TASK_COLUMNS = [
    ("id", "ID"),
    ("title", "Title"),
    ("status", "Status"),
    ("priority", "Priority"),
    ("due_date", "Due"),
    ("assignee", "Assignee"),
    ("updated_at", "Updated"),
]


def _cell(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif isinstance(data, list):
        format_task_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        get_console().print(data)


def format_task_table(tasks: list[dict]) -> None:
    """Format task dicts as a table, in the order given."""
    console = get_console()
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    for _, header in TASK_COLUMNS:
        table.add_column(header, overflow="fold")

    for task in tasks:
        row = []
        for key, _ in TASK_COLUMNS:
            value = _cell(task.get(key))
            if key == "status" and value in STATUS_COLORS:
                value = f"[{STATUS_COLORS[value]}]{value}[/]"
            elif key == "priority" and value in PRIORITY_COLORS:
                value = f"[{PRIORITY_COLORS[value]}]{value}[/]"
            elif key == "updated_at":
                value = format_timestamp(task.get(key)) or "-"
            row.append(value)
        table.add_row(*row)

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        if isinstance(value, dict):
            value = json.dumps(value, default=str)
        table.add_row(key.replace("_", " ").title(), _cell(value))

    get_console().print(table)


def format_timestamp(value: str | datetime | date | None) -> str:
    """Compact ``YYYY-MM-DD HH:MM`` rendering of an ISO timestamp."""
    if not value:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime(
            "%Y-%m-%d %H:%M"
        )
    except ValueError:
        return value


def format_error(message: str, hint: str | None = None) -> None:
    """Format and display an error message."""
    console = get_console()
    console.print(f"[bold red]Error:[/bold red] {message}")
    if hint:
        console.print(f"[dim]Hint:[/dim] {hint}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")
