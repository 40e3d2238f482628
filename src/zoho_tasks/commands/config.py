"""Configuration management commands."""

import typer

from zoho_tasks.config import ENV_VARS, get_config_manager
from zoho_tasks.utils.typer_helpers import SuggestingGroup
from zoho_tasks.utils.ui.console import get_console
from zoho_tasks.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format (table/json)"),
) -> None:
    """Show the effective configuration, API key masked."""
    config_manager = get_config_manager()
    settings = config_manager.settings.masked()
    if output == "json":
        format_output(settings, "json")
    else:
        flat = {
            f"{section}.{key}": value
            for section, values in settings.items()
            for key, value in values.items()
        }
        format_output(flat, output)

    for key in config_manager.missing_keys():
        env_var = next(env for env, k in ENV_VARS.items() if k == key)
        format_warning(f"{key} is not set ({env_var})")


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g. alloy.user_id)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Persist a configuration value to the config file."""
    config_manager = get_config_manager()
    config_manager.set_value(key, value)
    shown = "****" if key == "alloy.api_key" else value
    format_success(f"Set {key} = {shown}")


@app.command("path")
def config_path() -> None:
    """Print the config file location."""
    console.print(str(get_config_manager().config_file))
