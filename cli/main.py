"""Main entry point for schema-snapshot CLI tool."""

import logging

import typer

from cli import __version__
from cli.commands.assemble import assemble, driver_main, list_drivers

# Create main app
app = typer.Typer(
    name="schema-snapshot",
    help="Introspect database catalogs into schema snapshots for code generators",
    no_args_is_help=True,
    add_completion=False,
)

app.command(name="assemble")(assemble)
app.command(name="driver-main")(driver_main)
app.command(name="drivers")(list_drivers)


def version_callback(show_version: bool) -> None:
    """Show version and exit.

    Args:
        show_version: Whether to show version
    """
    if show_version:
        typer.echo(f"schema-snapshot version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every catalog query step to stderr"),
) -> None:
    """Introspect database catalogs into schema snapshots for code generators.

    Examples:

        # Snapshot a SQL CE database file
        schema-snapshot assemble sqlce --dbname Northwind.sdf --host Microsoft.SQLSERVER.CE.OLEDB.4.0

        # Only some tables and columns, as YAML
        schema-snapshot assemble sqlce --config db.yaml -w orders -w users.id --format yaml

        # Driver protocol: JSON config on stdin, JSON snapshot on stdout
        echo '{"dbname": "Northwind.sdf"}' | schema-snapshot driver-main sqlce
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()
