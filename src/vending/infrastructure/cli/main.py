from pathlib import Path

import click

from vending.infrastructure.cli.machine_commands import buy, show_config, status
from vending.infrastructure.cli.session_commands import session
from vending.infrastructure.logging_config import setup_logging


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with productList and coinInventory.",
)
@click.option("--log-level", default=None, help="Log level (default: $VENDING_LOG_LEVEL or WARNING).")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Vending machine transaction engine."""
    setup_logging(log_level.upper() if log_level else None)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# Register subcommands
cli.add_command(buy)
cli.add_command(session)
cli.add_command(show_config)
cli.add_command(status)
