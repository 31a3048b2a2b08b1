"""Portfolio analytics commands for the trade journal CLI.

Handles the account value overview, performance statistics, risk
analysis, and today's trades.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    currency,
    empty_panel,
    get_data_store,
    money,
    percent_markup,
    pnl_markup,
)

LEVEL_COLORS = {"low": "green", "medium": "yellow", "high": "red"}


@click.command()
@click.option("--points", type=int, default=None, help="Show only the last N series points.")
@click.pass_context
def overview(ctx: click.Context, points: Optional[int]) -> None:
    """Display account value, total P&L and the account value series.

    The series starts at the base account value and adds each trade's
    P&L in the order trades were opened.

    \b
    Examples:
      tradejournal overview
      tradejournal overview --points 20
    """
    from tradejournal.engine.account import account_summary, project_value_series
    from tradejournal.engine.pnl import total_market_value
    from tradejournal.engine.stats import performance_stats

    store = get_data_store(ctx)
    settings = store.get_settings()
    trades = store.list_trades()
    symbol = currency(ctx)

    summary = account_summary(trades, settings)
    perf = performance_stats(trades)
    open_count = sum(1 for t in trades if not t.is_closed)

    text = (
        f"[bold]Account Overview[/bold]\n\n"
        f"Base Value:     {money(summary.base_account_value, symbol)}\n"
        f"Current Value:  [bold]{money(summary.current_account_value, symbol)}[/bold]\n"
        f"Total P&L:      {pnl_markup(summary.pnl, symbol)} ({percent_markup(summary.pnl_percent)})\n"
        f"{'─' * 36}\n"
        f"Market Value:   {money(total_market_value(trades), symbol)}\n"
        f"Win Rate:       {perf.win_rate:.1f}%\n"
        f"Avg Gain:       {money(perf.avg_gain, symbol)} ({perf.avg_gain_percent:.2f}%)\n"
        f"Profit Factor:  {perf.profit_factor:.2f}\n\n"
        f"[dim]Trades: {len(trades)} | Open: {open_count} | Closed: {len(trades) - open_count}[/dim]"
    )
    console.print(Panel(text, title="[bold cyan]Portfolio[/bold cyan]", border_style="cyan"))

    series = project_value_series(trades, settings.base_account_value, summary.current_account_value)
    shown = series.points[-points:] if points else series.points

    table = Table(title="Account Value", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Change", justify="right")
    for point in shown:
        change = point.value - settings.base_account_value
        table.add_row(point.label, money(point.value, symbol), pnl_markup(change, symbol))
    console.print(table)
    console.print(
        f"[dim]Range: {money(series.domain_low, symbol)} - {money(series.domain_high, symbol)}[/dim]"
    )


def _trade_line(result, symbol: str) -> str:
    trade = result.trade
    return (
        f"  {trade.symbol:<8} {trade.side.upper():<5} "
        f"{pnl_markup(result.pnl.amount, symbol)} ({result.pnl.percent:+.2f}%)"
    )


def _period_lines(label: str, extremes, symbol: str) -> list[str]:
    lines = []
    if extremes.most is not None:
        lines.append(
            f"  Best {label}:  {extremes.most.period} {pnl_markup(extremes.most.profit, symbol)}"
        )
    if extremes.least is not None:
        lines.append(
            f"  Worst {label}: {extremes.least.period} {pnl_markup(extremes.least.profit, symbol)}"
        )
    return lines


@click.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Display trading performance statistics.

    Shows win rate, average gain and loss, profit factor, top gainers
    and losers, and the most and least profitable day, week and month.

    \b
    Examples:
      tradejournal stats
    """
    from tradejournal.engine.stats import performance_stats

    store = get_data_store(ctx)
    trades = store.list_trades()
    symbol = currency(ctx)

    if not trades:
        empty_panel(
            "No trades found",
            "Trading Statistics",
            "Run 'tradejournal add' or 'tradejournal import' to record trades",
        )
        return

    result = performance_stats(trades)

    lines = [
        "[bold]Overview:[/bold]",
        f"  Total Trades:   {result.total_trades}",
        f"  Wins / Losses:  {result.winning_trades}W / {result.losing_trades}L",
        f"  Win Rate:       {result.win_rate:.1f}%",
        f"  Total P&L:      {pnl_markup(result.total_pnl, symbol)}",
        "",
        "[bold]Averages:[/bold]",
        f"  Avg Gain:       {money(result.avg_gain, symbol)} ({result.avg_gain_percent:.2f}%)",
        f"  Avg Loss:       {money(result.avg_loss, symbol)}",
        f"  Profit Factor:  {result.profit_factor:.2f}",
    ]

    lines.append("\n[bold]Top Gainers:[/bold]")
    if result.top_gainers:
        lines.extend(_trade_line(r, symbol) for r in result.top_gainers)
    else:
        lines.append("  [dim]No winning trades[/dim]")

    lines.append("\n[bold]Top Losers:[/bold]")
    if result.top_losers:
        lines.extend(_trade_line(r, symbol) for r in result.top_losers)
    else:
        lines.append("  [dim]No losing trades[/dim]")

    lines.append("\n[bold]Period Breakdown:[/bold]")
    periods = result.periods
    for label, extremes in (("Month", periods.monthly), ("Week", periods.weekly), ("Day", periods.daily)):
        lines.extend(_period_lines(label, extremes, symbol))

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Trading Statistics[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.pass_context
def risk(ctx: click.Context) -> None:
    """Display portfolio risk analysis.

    Risk per trade is the distance from entry to stop-loss as a percent
    of position value. Portfolio heat weights that by position size.

    \b
    Examples:
      tradejournal risk
    """
    from tradejournal.engine.risk import heat_level, risk_category, risk_level, risk_report, risk_score

    store = get_data_store(ctx)
    trades = store.list_trades()

    report = risk_report(trades)
    if report.trade_count == 0:
        empty_panel("No trades with a positive position value", "Risk Analysis")
        return

    score = risk_score(report)
    level = risk_level(score)
    level_color = LEVEL_COLORS[level.lower()]
    avg_color = LEVEL_COLORS[risk_category(report.avg_risk_per_trade)]
    heat_color = LEVEL_COLORS[heat_level(report.portfolio_heat)]

    text = (
        f"[bold]Risk Analysis[/bold] ({report.trade_count} trades)\n\n"
        f"Risk Level:         [{level_color}]{level}[/{level_color}] (score {score})\n"
        f"Avg Risk / Trade:   [{avg_color}]{report.avg_risk_per_trade:.2f}%[/{avg_color}]\n"
        f"Portfolio Heat:     [{heat_color}]{report.portfolio_heat:.2f}%[/{heat_color}]\n"
        f"{'─' * 36}\n"
        f"[green]Low Risk (≤1%):     {report.low_risk:.1f}%[/green]\n"
        f"[yellow]Medium Risk (≤2%):  {report.medium_risk:.1f}%[/yellow]\n"
        f"[red]High Risk (>2%):    {report.high_risk:.1f}%[/red]"
    )
    console.print(Panel(text, title="[bold cyan]Risk[/bold cyan]", border_style="cyan"))


@click.command()
@click.pass_context
def today(ctx: click.Context) -> None:
    """Display trades opened today with their P&L."""
    from tradejournal.engine.pnl import calculate_pnl
    from tradejournal.engine.stats import todays_trades

    store = get_data_store(ctx)
    trades = todays_trades(store.list_trades())
    symbol = currency(ctx)

    if not trades:
        empty_panel("No trades today", "Today's Trades")
        return

    table = Table(title="Today's Trades", show_header=True, header_style="bold cyan")
    table.add_column("Time", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("P&L", justify="right")

    total = 0.0
    for trade in trades:
        pnl = calculate_pnl(trade)
        total += pnl.amount
        side_color = "green" if trade.side == "long" else "red"
        table.add_row(
            trade.created_at.strftime("%H:%M:%S"),
            trade.symbol,
            f"[{side_color}]{trade.side.upper()}[/{side_color}]",
            pnl_markup(pnl.amount, symbol),
        )

    console.print(table)
    console.print(f"\n[bold]Today's P&L:[/bold] {pnl_markup(total, symbol)}")
