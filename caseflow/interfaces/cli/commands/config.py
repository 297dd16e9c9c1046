"""Settings CLI commands."""

import typer
from pydantic import ValidationError

from caseflow.global_config import (
    Settings,
    get_config_dir,
    get_data_dir,
    get_global_config,
    save_global_config,
)
from caseflow.interfaces.cli.common import print_error, print_success

app = typer.Typer(help="Settings commands")


@app.command("show")
def show() -> None:
    """Show the current settings."""
    settings = get_global_config()
    typer.echo(f"Config dir: {get_config_dir()}")
    typer.echo(f"Data dir:   {get_data_dir(settings)}")
    typer.echo("")
    for key, value in settings.model_dump().items():
        typer.echo(f"{key} = {value}")


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Setting name"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change a setting.

    Example:
        caseflow config set generator ollama
        caseflow config set cancelled_satisfies_done true
    """
    if key not in Settings.model_fields:
        print_error(f"Unknown setting: {key}. Known: {', '.join(Settings.model_fields)}")
        raise typer.Exit(1)

    current = get_global_config()
    try:
        updated = Settings.model_validate({**current.model_dump(), key: value})
    except ValidationError as e:
        print_error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    save_global_config(updated)
    print_success(f"{key} = {getattr(updated, key)}")


@app.command("unset")
def unset(key: str = typer.Argument(..., help="Setting name")) -> None:
    """Reset a setting to its default."""
    if key not in Settings.model_fields:
        print_error(f"Unknown setting: {key}")
        raise typer.Exit(1)

    data = get_global_config().model_dump()
    data.pop(key)
    save_global_config(Settings.model_validate(data))
    print_success(f"{key} reset to default")
