"""Position sizing commands for the trade journal CLI."""

from typing import Optional

import click
from rich.panel import Panel

from tradejournal.cli.common import console, currency, fail, get_data_store, money


def _account_value(ctx: click.Context, use_current: bool) -> tuple[float, float, float]:
    """Account value to size against, plus risk percentage and profit/risk ratio."""
    from tradejournal.engine.account import current_account_value

    store = get_data_store(ctx)
    settings = store.get_settings()
    value = settings.base_account_value
    if use_current:
        value = current_account_value(store.list_trades(), value)
    return value, settings.risk_percentage, settings.profit_risk_ratio


@click.command()
@click.argument("entry", type=float)
@click.argument("stop", type=float)
@click.option("--account", type=float, default=None, help="Account value (default: base account value).")
@click.option("--risk", "risk_pct", type=float, default=None, help="Risk percentage (default: from settings).")
@click.option(
    "--current",
    "use_current",
    is_flag=True,
    default=False,
    help="Size against the current account value instead of the base value.",
)
@click.pass_context
def size(
    ctx: click.Context,
    entry: float,
    stop: float,
    account: Optional[float],
    risk_pct: Optional[float],
    use_current: bool,
) -> None:
    """Calculate how many shares to buy for an entry and stop-loss.

    ENTRY is the planned entry price, STOP the stop-loss price.

    \b
    Examples:
      tradejournal size 100 98                 # Use account settings
      tradejournal size 100 98 --risk 0.5      # Risk half a percent
      tradejournal size 50 52 --account 25000  # Custom account value
    """
    from tradejournal.engine.sizing import size_position

    value, default_risk, _ = _account_value(ctx, use_current)
    account = value if account is None else account
    risk_pct = default_risk if risk_pct is None else risk_pct

    if entry <= 0:
        fail("Please enter a valid entry price")

    result = size_position(account, risk_pct, entry, stop)
    symbol = currency(ctx)

    text = (
        f"[bold]Position Size[/bold]\n\n"
        f"Account Value:   {money(account, symbol)}\n"
        f"Risk:            {risk_pct:g}% = {money(result.dollar_risk, symbol)}\n"
        f"Risk per Share:  {money(result.risk_per_share, symbol)}\n"
        f"{'─' * 32}\n"
        f"[bold]Shares:          {result.shares:,}[/bold]\n"
        f"Position Value:  {money(result.total_position_value, symbol)}"
    )
    if result.shares == 0:
        text += "\n\n[yellow]Entry and stop are too close or the risk budget is too small.[/yellow]"
    console.print(Panel(text, title="[bold cyan]Position Sizer[/bold cyan]", border_style="cyan"))


@click.command()
@click.argument("entry", type=float)
@click.option("--short", is_flag=True, default=False, help="Suggest levels for a short position.")
@click.option("--account", type=float, default=None, help="Account value (default: base account value).")
@click.option("--risk", "risk_pct", type=float, default=None, help="Risk percentage (default: from settings).")
@click.pass_context
def suggest(
    ctx: click.Context,
    entry: float,
    short: bool,
    account: Optional[float],
    risk_pct: Optional[float],
) -> None:
    """Suggest stop-loss and take-profit for an entry price.

    Spreads the risk budget over the most shares the account can buy,
    then places the target at the profit/risk ratio.

    \b
    Examples:
      tradejournal suggest 100
      tradejournal suggest 250 --short
    """
    from tradejournal.engine.sizing import suggest_levels

    if entry <= 0:
        fail("Please enter a valid entry price")

    value, default_risk, ratio = _account_value(ctx, use_current=False)
    account = value if account is None else account
    risk_pct = default_risk if risk_pct is None else risk_pct
    side = "short" if short else "long"

    levels = suggest_levels(account, risk_pct, entry, side, ratio)
    if levels.max_shares == 0:
        fail(f"An account of {money(account, currency(ctx))} cannot buy one share at this price")

    symbol = currency(ctx)
    text = (
        f"[bold]Suggested Levels[/bold] ({side.upper()})\n\n"
        f"Entry:        {money(entry, symbol)}\n"
        f"[red]Stop Loss:    {money(levels.stop_loss, symbol)}[/red]\n"
        f"[green]Take Profit:  {money(levels.take_profit, symbol)}[/green]\n\n"
        f"[dim]Max shares: {levels.max_shares:,} | Risk/share: {money(levels.risk_per_share, symbol)} | "
        f"Profit/risk ratio: {ratio:g}[/dim]"
    )
    console.print(Panel(text, title="[bold cyan]Position Sizer[/bold cyan]", border_style="cyan"))
