"""Main CLI entry point for the trade journal.

This module provides the main click group and lazy loading
for command modules to keep startup fast.
"""

from pathlib import Path
from typing import Optional

import click


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their commands
    is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        # Prefer an attribute named after the command, else match on click name
        attr = getattr(module, cmd_name, None)
        if isinstance(attr, click.Command):
            cmd = attr
        else:
            cmd = None
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if isinstance(attr, click.Command) and attr.name == cmd_name:
                    cmd = attr
                    break

            if cmd is None:
                raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Journal entries
    "add": "tradejournal.cli.trade",
    "close": "tradejournal.cli.trade",
    "mark": "tradejournal.cli.trade",
    "delete": "tradejournal.cli.trade",
    "clear": "tradejournal.cli.trade",
    "positions": "tradejournal.cli.trade",
    # Analytics
    "overview": "tradejournal.cli.portfolio",
    "stats": "tradejournal.cli.portfolio",
    "risk": "tradejournal.cli.portfolio",
    "today": "tradejournal.cli.portfolio",
    # Position sizing
    "size": "tradejournal.cli.sizing",
    "suggest": "tradejournal.cli.sizing",
    # Settings
    "settings": "tradejournal.cli.settings",
    # Import/export
    "import": "tradejournal.cli.data",
    "export": "tradejournal.cli.data",
    "sample": "tradejournal.cli.data",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="TRADEJOURNAL_DB",
    default=None,
    help="Path to the journal database (overrides the config file).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, db_path: Optional[Path], verbose: bool) -> None:
    """Trade Journal - record trades and analyse your performance.

    Log positions, track account value, and review risk exposure,
    win rate and period profitability.

    \b
    Quick Start:
      tradejournal settings setup                        # Starting capital and risk
      tradejournal add AAPL 10 --entry 100 --stop 98     # Log a long trade
      tradejournal overview                              # Account value over time
    """
    from tradejournal.config import load_config
    from tradejournal.logs import setup_logging

    ctx.ensure_object(dict)
    config = load_config()
    setup_logging(config.get("logging", {}).get("level", "WARNING"), verbose=verbose)
    ctx.obj["config"] = config
    ctx.obj["db_path"] = db_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
