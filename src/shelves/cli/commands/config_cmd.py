# ABOUTME: The `shelves config` command group for stored settings.
# ABOUTME: Saves the Gemini API key used by insights and summaries.

from pathlib import Path

import click
from rich.console import Console

from shelves.cli.options import store_option
from shelves.config import Settings
from shelves.insights.gemini import resolve_api_key, save_api_key
from shelves.storage.sqlite import open_store

console = Console()


@click.group("config")
def config() -> None:
    """Manage Shelves settings."""


@config.command("set-api-key")
@click.argument("api_key")
@store_option
def set_api_key(api_key: str, store_path: Path | None) -> None:
    """Store a Gemini API key for AI insights and summaries."""
    try:
        with open_store(store_path) as store:
            save_api_key(store, api_key)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    console.print("[green]API key saved.[/green]")


@config.command("show")
@store_option
def show(store_path: Path | None) -> None:
    """Show the effective settings."""
    settings = Settings.from_env()
    with open_store(store_path) as store:
        api_key = resolve_api_key(settings, store)

    console.print(f"[bold]Store:[/bold] {store_path or settings.store_path}")
    console.print(f"[bold]User:[/bold] {settings.user_id}")
    console.print(f"[bold]HTTP timeout:[/bold] {settings.http_timeout:g}s")
    console.print(f"[bold]Gemini API key:[/bold] {'set' if api_key else 'not set'}")
