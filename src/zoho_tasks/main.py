"""Main entry point for the zoho-tasks CLI."""

import json
from typing import Optional

import typer

from zoho_tasks import __version__
from zoho_tasks.api.client import get_client
from zoho_tasks.api.tasks import TasksAPI
from zoho_tasks.commands import config, tasks
from zoho_tasks.commands.decorators import command_wrapper
from zoho_tasks.config import get_config_manager
from zoho_tasks.errors import ValidationError
from zoho_tasks.functions import handler
from zoho_tasks.utils.exit_codes import ERROR_GENERAL
from zoho_tasks.utils.typer_helpers import SuggestingGroup
from zoho_tasks.utils.ui.console import get_console
from zoho_tasks.utils.ui.formatters import format_success

app = typer.Typer(
    name="zoho-tasks",
    cls=SuggestingGroup,
    help="Manage Zoho CRM tasks through the Alloy connector API",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]zoho-tasks[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
@command_wrapper
async def check() -> None:
    """Verify settings and make one test call to the connector API."""
    settings = get_config_manager().require_credentials()
    console.print(f"Connector: [cyan]{settings.alloy.base_url}[/cyan]")
    console.print(f"User: [cyan]{settings.alloy.user_id}[/cyan]")
    console.print(f"Credential: [cyan]{settings.alloy.credential_id}[/cyan]")

    client = get_client(settings)
    try:
        await TasksAPI(client).list_tasks(per_page=1)
    finally:
        await client.close()
    format_success("Connector API and Zoho CRM credential are working")


@app.command()
@command_wrapper
def invoke(
    method: str = typer.Argument(..., help="HTTP method (GET/POST/PUT/PATCH/DELETE)"),
    task_id: Optional[str] = typer.Option(None, "--id", help="Task ID path parameter"),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON request body"),
    page: Optional[int] = typer.Option(None, "--page", min=1, help="Page query parameter"),
) -> None:
    """Run the serverless task function locally and print its response."""
    if data is not None:
        try:
            json.loads(data)
        except json.JSONDecodeError as e:
            raise ValidationError(f"--data is not valid JSON: {e.msg}") from e

    event = {
        "httpMethod": method.upper(),
        "path": "/tasks" + (f"/{task_id}" if task_id else ""),
        "pathParameters": {"id": task_id} if task_id else None,
        "queryStringParameters": {"page": str(page)} if page else None,
        "body": data,
    }
    response = handler(event)

    status = response["statusCode"]
    style = "green" if status < 400 else "red"
    console.print(f"[{style}]HTTP {status}[/{style}]")
    if response["body"]:
        console.print_json(response["body"])
    if status >= 400:
        raise typer.Exit(code=ERROR_GENERAL)


if __name__ == "__main__":
    app()
