"""Trade entry commands for the trade journal CLI.

Handles adding, closing, re-marking and deleting trades, and the
filtered journal listing.
"""

import math
from datetime import date
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    currency,
    empty_panel,
    fail,
    get_data_store,
    money,
    pnl_markup,
)


def _parse_date(value: Optional[str], label: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Invalid date format: {value}. Use YYYY-MM-DD", param_hint=label) from None


@click.command()
@click.argument("symbol")
@click.argument("qty", type=float)
@click.option("-e", "--entry", "entry_price", type=float, required=True, help="Entry price.")
@click.option("-s", "--stop", "stop_loss", type=float, required=True, help="Stop-loss price.")
@click.option(
    "-t", "--target",
    "take_profit",
    type=float,
    default=None,
    help="Take-profit price. Defaults to the stop distance times the profit/risk ratio.",
)
@click.option("-x", "--exit", "exit_price", type=float, default=None, help="Exit price for a closed trade.")
@click.option("--short", is_flag=True, default=False, help="Record a short position.")
@click.pass_context
def add(
    ctx: click.Context,
    symbol: str,
    qty: float,
    entry_price: float,
    stop_loss: float,
    take_profit: Optional[float],
    exit_price: Optional[float],
    short: bool,
) -> None:
    """Add a trade to the journal.

    SYMBOL is the instrument (e.g., AAPL, MSFT).
    QTY is the number of shares or units.

    \b
    Examples:
      tradejournal add AAPL 10 --entry 100 --stop 98              # Long, target from ratio
      tradejournal add TSLA 5 --entry 200 --stop 205 --short      # Short position
      tradejournal add MSFT 20 -e 300 -s 295 -t 320 --exit 318    # Closed trade
    """
    from tradejournal.engine.sizing import take_profit_from_stop
    from tradejournal.models import InvalidTradeError, TradeInput

    store = get_data_store(ctx)
    side = "short" if short else "long"
    symbol_sign = currency(ctx)

    if take_profit is None:
        ratio = store.get_settings().profit_risk_ratio
        take_profit = round(take_profit_from_stop(entry_price, stop_loss, side, ratio), 2)

    try:
        trade = store.create_trade(TradeInput(
            symbol=symbol,
            side=side,
            quantity=qty,
            entry_price=entry_price,
            exit_price=exit_price,
            stop_loss=stop_loss,
            take_profit=take_profit,
        ))
    except (InvalidTradeError, ValidationError) as e:
        fail(str(e), title="Invalid Trade")

    side_color = "green" if trade.side == "long" else "red"
    text = (
        f"[bold]Trade #{trade.id} recorded[/bold]\n\n"
        f"Symbol:      {trade.symbol}\n"
        f"Side:        [{side_color}]{trade.side.upper()}[/{side_color}]\n"
        f"Quantity:    {trade.quantity:g}\n"
        f"Entry:       {money(trade.entry_price, symbol_sign)}\n"
        f"Stop Loss:   {money(trade.stop_loss, symbol_sign)}\n"
        f"Take Profit: {money(trade.take_profit, symbol_sign)}"
    )
    if trade.exit_price is not None:
        text += f"\nExit:        {money(trade.exit_price, symbol_sign)}"
    console.print(Panel(text, title="[bold green]Success[/bold green]", border_style="green"))


@click.command()
@click.argument("trade_id", type=int)
@click.argument("price", type=float)
@click.pass_context
def close(ctx: click.Context, trade_id: int, price: float) -> None:
    """Close a trade at an exit price.

    \b
    Examples:
      tradejournal close 3 104.5
    """
    from tradejournal.engine.pnl import calculate_pnl

    if not math.isfinite(price) or price <= 0:
        fail("Please enter a valid exit price", title="Invalid Trade")

    store = get_data_store(ctx)
    existing = store.get_trade(trade_id)
    if existing is None:
        fail(f"Trade #{trade_id} not found")
    if existing.is_closed:
        fail(f"Trade #{trade_id} is already closed at {money(existing.exit_price, currency(ctx))}")

    store.update_trade(trade_id, exit_price=price, current_price=price)
    trade = store.get_trade(trade_id)
    pnl = calculate_pnl(trade)
    console.print(
        f"[green]✓ Closed #{trade_id} {trade.symbol}[/green] "
        f"P&L: {pnl_markup(pnl.amount, currency(ctx))} ({pnl.percent:+.2f}%)"
    )


@click.command()
@click.argument("trade_id", type=int)
@click.argument("price", type=float)
@click.pass_context
def mark(ctx: click.Context, trade_id: int, price: float) -> None:
    """Update the current price of an open trade.

    \b
    Examples:
      tradejournal mark 3 101.25
    """
    if not math.isfinite(price) or price <= 0:
        fail("Please enter a valid current price", title="Invalid Trade")

    store = get_data_store(ctx)
    existing = store.get_trade(trade_id)
    if existing is None:
        fail(f"Trade #{trade_id} not found")
    if existing.is_closed:
        fail(f"Trade #{trade_id} is closed; its exit price is final")

    store.update_trade(trade_id, current_price=price)
    console.print(f"[green]✓ Marked #{trade_id} {existing.symbol} at {money(price, currency(ctx))}[/green]")


@click.command()
@click.argument("trade_id", type=int)
@click.pass_context
def delete(ctx: click.Context, trade_id: int) -> None:
    """Delete a trade from the journal."""
    store = get_data_store(ctx)
    if not store.delete_trade(trade_id):
        fail(f"Trade #{trade_id} not found")
    console.print(f"[green]✓ Deleted trade #{trade_id}[/green]")


@click.command()
@click.option(
    "--all", "wipe_all",
    is_flag=True,
    default=False,
    help="Also reset account settings to their defaults.",
)
@click.confirmation_option(prompt="Delete all trades from the journal?")
@click.pass_context
def clear(ctx: click.Context, wipe_all: bool) -> None:
    """Delete every trade in the journal."""
    store = get_data_store(ctx)
    if wipe_all:
        store.clear_data()
        console.print("[green]✓ Journal wiped and settings reset[/green]")
    else:
        count = store.clear_trades()
        console.print(f"[green]✓ Deleted {count} trades[/green]")


@click.command()
@click.option("--symbol", default="", help="Filter by symbol (substring match).")
@click.option("--side", type=click.Choice(["all", "long", "short"]), default="all")
@click.option("--status", type=click.Choice(["all", "open", "closed"]), default="all")
@click.option("--from", "start", default=None, help="Earliest date (YYYY-MM-DD).")
@click.option("--to", "end", default=None, help="Latest date (YYYY-MM-DD).")
@click.option(
    "--profitability",
    type=click.Choice(["all", "profitable", "unprofitable"]),
    default="all",
)
@click.option(
    "--sort",
    "sort_field",
    type=click.Choice(["date", "symbol", "side", "quantity", "entry_price", "price", "pnl"]),
    default="date",
    help="Column to sort by.",
)
@click.option("--asc", is_flag=True, default=False, help="Sort ascending (default descending).")
@click.option("--limit", type=int, default=None, help="Show at most this many trades.")
@click.pass_context
def positions(
    ctx: click.Context,
    symbol: str,
    side: str,
    status: str,
    start: Optional[str],
    end: Optional[str],
    profitability: str,
    sort_field: str,
    asc: bool,
    limit: Optional[int],
) -> None:
    """List journal trades with P&L.

    \b
    Examples:
      tradejournal positions                          # All trades, newest first
      tradejournal positions --status open            # Open positions
      tradejournal positions --sort pnl --limit 10    # Ten best trades
      tradejournal positions --from 2024-01-01 --profitability unprofitable
    """
    from tradejournal.engine.journal import JournalFilter, filter_trades, sort_trades
    from tradejournal.engine.pnl import calculate_pnl, valuation_price

    criteria = JournalFilter(
        symbol=symbol,
        side=side,
        status=status,
        start=_parse_date(start, "--from"),
        end=_parse_date(end, "--to"),
        profitability=profitability,
    )

    store = get_data_store(ctx)
    all_trades = store.list_trades()
    trades = sort_trades(filter_trades(all_trades, criteria), sort_field, descending=not asc)
    if limit is not None:
        trades = trades[:limit]

    if not trades:
        hint = f"{criteria.active_count()} filter(s) active" if criteria.active_count() else None
        empty_panel("No trades found", "Trade Journal", hint)
        return

    symbol_sign = currency(ctx)
    table = Table(title="Trade Journal", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date/Time", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Qty", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Status", justify="center")
    table.add_column("P&L", justify="right")
    table.add_column("P&L %", justify="right")

    total = 0.0
    for trade in trades:
        pnl = calculate_pnl(trade)
        total += pnl.amount
        side_color = "green" if trade.side == "long" else "red"
        table.add_row(
            str(trade.id),
            trade.created_at.strftime("%Y-%m-%d %H:%M") if trade.created_at else "-",
            trade.symbol,
            f"[{side_color}]{trade.side.upper()}[/{side_color}]",
            f"{trade.quantity:g}",
            money(trade.entry_price, symbol_sign),
            money(valuation_price(trade), symbol_sign),
            "[dim]Closed[/dim]" if trade.is_closed else "[yellow]Open[/yellow]",
            pnl_markup(pnl.amount, symbol_sign),
            f"{pnl.percent:+.2f}%",
        )

    console.print(table)
    console.print(f"\n[bold]Showing:[/bold] {len(trades)} of {len(all_trades)} trades")
    console.print(f"[bold]Total P&L:[/bold] {pnl_markup(total, symbol_sign)}")
