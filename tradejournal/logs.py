"""Logging setup for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Route log records to stderr through rich.

    Args:
        level: Level name from configuration.
        verbose: Force DEBUG regardless of the configured level.
    """
    resolved = logging.DEBUG if verbose else getattr(logging, str(level).upper(), logging.WARNING)
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
