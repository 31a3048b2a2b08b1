"""Shared helpers for CLI commands."""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal.config import get_currency, get_db_path, load_config

console = Console()


def get_config(ctx: click.Context) -> dict:
    """Configuration loaded by the root group, or from disk."""
    obj = ctx.find_root().obj or {}
    config = obj.get("config")
    if config is None:
        config = load_config()
    return config


def get_data_store(ctx: click.Context):
    """Get the data store instance."""
    from tradejournal.db.store import DataStore

    obj = ctx.find_root().obj or {}
    db_path = obj.get("db_path") or get_db_path(get_config(ctx))
    return DataStore(db_path)


def currency(ctx: click.Context) -> str:
    return get_currency(get_config(ctx))


def money(value: float, symbol: str = "$", signed: bool = False) -> str:
    """Format a currency amount, e.g. $1,234.50 or -$20.00."""
    sign = "-" if value < 0 else ("+" if signed and value > 0 else "")
    return f"{sign}{symbol}{abs(value):,.2f}"


def pnl_markup(value: float, symbol: str = "$") -> str:
    """Colour a P&L amount green or red."""
    color = "green" if value >= 0 else "red"
    return f"[{color}]{money(value, symbol, signed=True)}[/{color}]"


def percent_markup(value: float) -> str:
    color = "green" if value >= 0 else "red"
    return f"[{color}]{value:+.2f}%[/{color}]"


def error_panel(message: str, title: str = "Error") -> None:
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    error_panel(message, title)
    raise SystemExit(1)


def empty_panel(message: str, title: str, hint: Optional[str] = None) -> None:
    text = f"[dim]{message}[/dim]"
    if hint:
        text += f"\n\n[dim]{hint}[/dim]"
    console.print(Panel(text, title=f"[bold]{title}[/bold]", border_style="dim"))
