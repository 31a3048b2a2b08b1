"""Import, export and sample data commands for the trade journal CLI."""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, get_data_store


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_trades(ctx: click.Context, path: Path) -> None:
    """Import trades from a CSV or Excel file.

    Recognised columns (case and spacing ignored): Symbol, Type, Quantity,
    Entry Price, Current Price, Exit Price, Stop Loss, Take Profit.
    Rows that fail validation are skipped and reported.

    \b
    Examples:
      tradejournal import trades.xlsx
      tradejournal import history.csv
    """
    from tradejournal.io.spreadsheet import import_trades as apply_import
    from tradejournal.io.spreadsheet import read_rows

    try:
        rows = read_rows(path)
    except ValueError as e:
        fail(str(e), title="Import Failed")

    result = apply_import(get_data_store(ctx), rows)

    summary = (
        f"[bold]Import Complete[/bold]\n\n"
        f"File:      {path.name}\n"
        f"Rows:      {len(rows)}\n"
        f"Imported:  [green]{len(result.created)}[/green]\n"
        f"Skipped:   [{'red' if result.failed else 'dim'}]{len(result.failed)}[/]"
    )
    console.print(Panel(summary, title="[bold cyan]Trade Import[/bold cyan]", border_style="cyan"))

    if result.failed:
        table = Table(title="Skipped Rows", show_header=True, header_style="bold red")
        table.add_column("Row", justify="right")
        table.add_column("Reason")
        for failure in result.failed:
            table.add_row(str(failure.row), failure.message)
        console.print(table)


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path), required=False)
@click.pass_context
def export(ctx: click.Context, path: Optional[Path]) -> None:
    """Export all trades to an Excel (.xlsx) or CSV file.

    Defaults to trades_<today>.xlsx in the current directory.

    \b
    Examples:
      tradejournal export
      tradejournal export journal.csv
    """
    from tradejournal.io.spreadsheet import default_export_name, write_trades

    trades = get_data_store(ctx).list_trades()
    path = path or Path(default_export_name())
    try:
        write_trades(trades, path)
    except ValueError as e:
        fail(str(e), title="Export Failed")
    console.print(f"[green]✓ Exported {len(trades)} trades to {path}[/green]")


@click.command()
@click.option("--months", type=int, default=3, help="Months of history to generate.")
@click.option("--seed", type=int, default=None, help="Random seed for repeatable data.")
@click.confirmation_option(prompt="Replace all journal trades with sample data?")
@click.pass_context
def sample(ctx: click.Context, months: int, seed: Optional[int]) -> None:
    """Replace the journal's trades with generated sample trades."""
    import random

    from tradejournal.io.sample import populate_sample_data

    trades = populate_sample_data(get_data_store(ctx), months=months, rng=random.Random(seed))
    console.print(f"[green]✓ Added {len(trades)} sample trades over {months} months[/green]")
