"""Account settings commands for the trade journal CLI."""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel

from tradejournal.cli.common import console, currency, fail, get_data_store, money


def _show(settings, symbol: str) -> None:
    status = "[green]Complete[/green]" if settings.setup_completed else "[yellow]Pending[/yellow]"
    text = (
        f"[bold]Account Settings[/bold]\n\n"
        f"Base Account Value:  {money(settings.base_account_value, symbol)}\n"
        f"Risk per Trade:      {settings.risk_percentage:g}%\n"
        f"Profit/Risk Ratio:   {settings.profit_risk_ratio:g}\n"
        f"Loss/Risk Ratio:     {settings.loss_risk_ratio:g}\n"
        f"Setup:               {status}"
    )
    console.print(Panel(text, title="[bold cyan]Settings[/bold cyan]", border_style="cyan"))


@click.group(invoke_without_command=True)
@click.pass_context
def settings(ctx: click.Context) -> None:
    """View and change account settings.

    \b
    Examples:
      tradejournal settings                       # Show settings
      tradejournal settings set --base 50000      # Change starting capital
      tradejournal settings setup                 # Guided first-run setup
    """
    if ctx.invoked_subcommand is None:
        _show(get_data_store(ctx).get_settings(), currency(ctx))


@settings.command("show")
@click.pass_context
def show(ctx: click.Context) -> None:
    """Show current account settings."""
    _show(get_data_store(ctx).get_settings(), currency(ctx))


@settings.command("set")
@click.option("--base", "base_account_value", type=float, default=None, help="Base account value.")
@click.option("--risk", "risk_percentage", type=float, default=None, help="Risk percentage per trade.")
@click.option("--profit-ratio", "profit_risk_ratio", type=float, default=None, help="Profit/risk ratio.")
@click.option("--loss-ratio", "loss_risk_ratio", type=float, default=None, help="Loss/risk ratio.")
@click.pass_context
def set_settings(
    ctx: click.Context,
    base_account_value: Optional[float],
    risk_percentage: Optional[float],
    profit_risk_ratio: Optional[float],
    loss_risk_ratio: Optional[float],
) -> None:
    """Change one or more account settings.

    Changing the base account value does not alter recorded trades.
    """
    updates = {
        key: value
        for key, value in (
            ("base_account_value", base_account_value),
            ("risk_percentage", risk_percentage),
            ("profit_risk_ratio", profit_risk_ratio),
            ("loss_risk_ratio", loss_risk_ratio),
        )
        if value is not None
    }
    if not updates:
        fail("Nothing to change. Pass at least one option (see --help)")

    try:
        updated = get_data_store(ctx).update_settings(**updates)
    except ValidationError as e:
        fail(str(e), title="Invalid Settings")
    _show(updated, currency(ctx))


@settings.command("setup")
@click.option("--base", "base_account_value", type=float, prompt="Starting account value", default=100000.0)
@click.option("--risk", "risk_percentage", type=float, prompt="Risk per trade (%)", default=1.0)
@click.option("--profit-ratio", "profit_risk_ratio", type=float, prompt="Profit/risk ratio", default=2.0)
@click.pass_context
def setup(
    ctx: click.Context,
    base_account_value: float,
    risk_percentage: float,
    profit_risk_ratio: float,
) -> None:
    """Guided first-run setup of capital and risk."""
    try:
        updated = get_data_store(ctx).update_settings(
            base_account_value=base_account_value,
            risk_percentage=risk_percentage,
            profit_risk_ratio=profit_risk_ratio,
            setup_completed=True,
        )
    except ValidationError as e:
        fail(str(e), title="Invalid Settings")
    _show(updated, currency(ctx))


@settings.command("init-config")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
def init_config(force: bool) -> None:
    """Write a template configuration file."""
    from tradejournal.config import create_template_config, get_config_path

    path = get_config_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow] (use --force to overwrite)")
        return
    path = create_template_config(path)
    console.print(f"[green]✓ Wrote config template to {path}[/green]")
