"""Main CLI entry point for dsdialect."""

from __future__ import annotations

import click

from dsdialect import __version__
from dsdialect.cli.commands import register_commands
from dsdialect.cli.commands.configuration import config_group
from dsdialect.cli.commands.datastore import DATASTORE_COMMANDS
from dsdialect.cli.utils import console, setup_logging
from dsdialect.config.models import EnvironmentSettings


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version information")
@click.option("--config", type=click.Path(exists=True), help="Path to configuration file")
@click.option("--db", help="Database connection name")
@click.option("--output", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context,
    version: bool,
    config: str,
    db: str,
    output: str,
    verbose: bool,
) -> None:
    """dsdialect - one interface over relational database engine differences."""
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": config,
            "db": db,
            "output": output,
            "verbose": verbose,
        }
    )
    setup_logging(verbose, EnvironmentSettings().log_level)

    if version:
        console.print(f"dsdialect v{__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli, [*DATASTORE_COMMANDS, config_group])


if __name__ == "__main__":
    cli()
