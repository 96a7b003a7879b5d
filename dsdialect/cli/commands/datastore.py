"""Datastore inspection and lifecycle CLI commands."""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

import click
from rich.markup import escape
from rich.table import Table

from dsdialect.cli.utils import console
from dsdialect.config import get_config
from dsdialect.db.base import Manager
from dsdialect.db.connection import get_connection_manager
from dsdialect.dialects import DatastoreDialect, DialectRegistry, SQLDatastoreDialect
from dsdialect.exceptions import ConfigurationError, DSDialectError


@contextmanager
def _command_errors() -> Iterator[None]:
    try:
        yield
    except ConfigurationError as exc:
        console.print(f"[red]Configuration Error: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc
    except DSDialectError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc


def _resolve(ctx: click.Context) -> Tuple[DatastoreDialect, Manager]:
    config = get_config(ctx.obj.get('config'))
    return get_connection_manager(config).get(ctx.obj.get('db'))


def _print_names(ctx: click.Context, title: str, names: List[str]) -> None:
    if ctx.obj.get('output') == 'json':
        click.echo(json.dumps(names))
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column(title, style="cyan")
    for name in names:
        table.add_row(name)
    console.print(table)
    console.print(f"\nTotal: {len(names)}")


@click.command(name="dialects")
@click.pass_context
def dialects_command(ctx: click.Context) -> None:
    """List supported database engines and their capabilities."""
    names = DialectRegistry.available()
    if ctx.obj.get('output') == 'json':
        click.echo(json.dumps(names))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Dialect", style="cyan")
    table.add_column("Key lookup", style="green")
    table.add_column("FK check toggle", style="green")
    table.add_column("Batch persist", style="yellow")
    for name in names:
        dialect = DialectRegistry.get(name)
        key_lookup = fk_toggle = "?"
        if isinstance(dialect, SQLDatastoreDialect):
            key_lookup = "yes" if dialect.config.supports_key_lookup else "no"
            fk_toggle = "yes" if dialect.config.supports_foreign_key_check else "no"
        table.add_row(name, key_lookup, fk_toggle, "yes" if dialect.can_persist_batch() else "no")
    console.print(table)


@click.command(name="tables")
@click.option("--datastore", "-d", help="Datastore to list tables from (default: current datastore)")
@click.pass_context
def tables_command(ctx: click.Context, datastore: Optional[str]) -> None:
    """List tables in a datastore."""
    with _command_errors():
        dialect, manager = _resolve(ctx)
        datastore = datastore or dialect.get_current_datastore(manager)
        _print_names(ctx, f"Tables in {datastore}", dialect.get_tables(manager, datastore))


@click.command(name="datastores")
@click.pass_context
def datastores_command(ctx: click.Context) -> None:
    """List datastores (databases or schemas)."""
    with _command_errors():
        dialect, manager = _resolve(ctx)
        _print_names(ctx, "Datastores", dialect.get_datastores(manager))


@click.command(name="current")
@click.pass_context
def current_command(ctx: click.Context) -> None:
    """Show the current datastore."""
    with _command_errors():
        dialect, manager = _resolve(ctx)
        click.echo(dialect.get_current_datastore(manager))


@click.command(name="sequence")
@click.argument("name")
@click.pass_context
def sequence_command(ctx: click.Context, name: str) -> None:
    """Show the sequence value for a table or sequence."""
    with _command_errors():
        dialect, manager = _resolve(ctx)
        click.echo(dialect.get_sequence(manager, name))


@click.command(name="key")
@click.argument("table")
@click.option("--datastore", "-d", help="Datastore holding the table (default: current datastore)")
@click.pass_context
def key_command(ctx: click.Context, table: str, datastore: Optional[str]) -> None:
    """Show primary key column(s) of a table."""
    with _command_errors():
        dialect, manager = _resolve(ctx)
        datastore = datastore or dialect.get_current_datastore(manager)
        key = dialect.get_key_name(manager, datastore, table)
        if not key:
            console.print(f"[yellow]No primary key found for {table}[/yellow]")
            return
        click.echo(key)


@click.command(name="create-datastore")
@click.argument("name")
@click.pass_context
def create_datastore_command(ctx: click.Context, name: str) -> None:
    """Create a datastore."""
    with _command_errors():
        dialect, manager = _resolve(ctx)
        dialect.create_datastore(manager, name)
        console.print(f"[green]Datastore '{name}' created[/green]")


@click.command(name="drop-datastore")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def drop_datastore_command(ctx: click.Context, name: str, yes: bool) -> None:
    """Drop a datastore."""
    if not yes:
        click.confirm(f"Drop datastore '{name}'?", abort=True)
    with _command_errors():
        dialect, manager = _resolve(ctx)
        dialect.drop_datastore(manager, name)
        console.print(f"[green]Datastore '{name}' dropped[/green]")


@click.command(name="create-table")
@click.argument("table")
@click.argument("specification")
@click.option("--datastore", "-d", default="", help="Datastore to create the table in")
@click.pass_context
def create_table_command(ctx: click.Context, table: str, specification: str, datastore: str) -> None:
    """Create a table from a column specification, e.g. "id INT, name TEXT"."""
    with _command_errors():
        dialect, manager = _resolve(ctx)
        dialect.create_table(manager, datastore, table, specification)
        console.print(f"[green]Table '{table}' created[/green]")


@click.command(name="drop-table")
@click.argument("table")
@click.option("--datastore", "-d", default="", help="Datastore holding the table")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def drop_table_command(ctx: click.Context, table: str, datastore: str, yes: bool) -> None:
    """Drop a table."""
    if not yes:
        click.confirm(f"Drop table '{table}'?", abort=True)
    with _command_errors():
        dialect, manager = _resolve(ctx)
        dialect.drop_table(manager, datastore, table)
        console.print(f"[green]Table '{table}' dropped[/green]")


DATASTORE_COMMANDS = [
    dialects_command,
    tables_command,
    datastores_command,
    current_command,
    sequence_command,
    key_command,
    create_datastore_command,
    drop_datastore_command,
    create_table_command,
    drop_table_command,
]
