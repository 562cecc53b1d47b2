from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from screen_recorder.cli.theme import theme
from screen_recorder.infrastructure.persistence.settings_store import SettingsStore

console = Console(highlight=False)

GLOBAL_KEYS = ("default_command",)
JOB_KEYS = ("command", "fail_on_error", "output_path_template")


def config(
    key: str = typer.Argument(..., help="default_command, or with --job: command, fail_on_error, output_path_template"),
    value: str | None = typer.Argument(None, help="Value to set (omit to get current value)"),
    job: str | None = typer.Option(None, "--job", "-j", help="Job whose settings to read or change"),
    home: Path | None = typer.Option(None, "--home", help="Recorder home directory"),
) -> None:
    """Get or set recorder settings."""
    store = SettingsStore(home)
    allowed = JOB_KEYS if job else GLOBAL_KEYS
    if key not in allowed:
        console.print(f"[{theme.ERROR}]Invalid key: {key}. Use one of: {', '.join(allowed)}[/]")
        raise typer.Exit(1)

    settings = store.load_job(job) if job else store.load_global()

    if value is None:
        console.print(f"{key}: {escape(str(getattr(settings, key)))}")
        return

    try:
        updated = type(settings).model_validate({**settings.model_dump(), key: value})
    except ValidationError as e:
        msg = e.errors()[0].get("msg", str(e))
        console.print(f"[{theme.ERROR}]Invalid value for {key}: {msg}[/]")
        raise typer.Exit(1) from None

    if job:
        store.save_job(job, updated)
    else:
        store.save_global(updated)
    console.print(f"[{theme.SUCCESS}]Set {key} to {escape(value)}[/]")
