"""CLI commands for the trade journal.

This package provides the command-line interface, including trade entry,
analytics, position sizing, settings, and import/export commands.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
