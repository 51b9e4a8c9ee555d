"""Schema snapshot commands."""

import json
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import typer
import yaml

from cli.output import error_message, output_snapshot
from snapshot.config import (
    CONFIG_BLACKLIST,
    CONFIG_DB_NAME,
    CONFIG_HOST,
    CONFIG_SCHEMA,
    CONFIG_URL,
    CONFIG_WHITELIST,
    DriverConfig,
)
from snapshot.drivers import default_registry
from snapshot.errors import (
    ConfigError,
    DatabaseConnectionError,
    DriverNotFoundError,
    QueryError,
    SnapshotError,
)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load driver configuration from a YAML or JSON file.

    Args:
        path: Path to the configuration file

    Returns:
        Configuration mapping (empty for an empty file)

    Raises:
        ConfigError: If the file cannot be parsed or does not hold a mapping
    """
    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(str(path), f"invalid configuration file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), "configuration file must contain a mapping")
    return data


def build_config(base: Mapping[str, Any] | None = None, **overrides: Any) -> DriverConfig:
    """Merge command line overrides into file configuration.

    Overrides that are None (option not given) or empty lists are skipped.
    """
    values = dict(base or {})
    for key, value in overrides.items():
        if value is None or value == []:
            continue
        values[key] = value
    return DriverConfig(values)


def assemble(
    driver: str = typer.Argument("sqlce", help="Driver name (see 'schema-snapshot drivers')"),
    dbname: str | None = typer.Option(None, "--dbname", help="Data source, e.g. path to the database file"),
    host: str | None = typer.Option(None, "--host", help="Provider, e.g. Microsoft.SQLSERVER.CE.OLEDB.4.0"),
    schema: str | None = typer.Option(None, "--schema", help="Schema name (default depends on the driver)"),
    url: str | None = typer.Option(None, "--url", help="SQLAlchemy URL to use instead of the built one"),
    whitelist: list[str] | None = typer.Option(
        None, "--whitelist", "-w", help="Only include this table or table.column (repeatable)"
    ),
    blacklist: list[str] | None = typer.Option(
        None, "--blacklist", "-b", help="Exclude this table or table.column (repeatable)"
    ),
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="YAML or JSON driver configuration", exists=True, dir_okay=False, resolve_path=True
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file path (default: stdout)", dir_okay=False, resolve_path=True
    ),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format: json or yaml"),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print JSON output"),
) -> None:
    """Introspect a database and write its schema snapshot.

    Example:
        schema-snapshot assemble sqlce --dbname Northwind.sdf --host Microsoft.SQLSERVER.CE.OLEDB.4.0 --pretty
    """
    try:
        file_values = load_config_file(config_file) if config_file else {}
        config = build_config(
            file_values,
            **{
                CONFIG_DB_NAME: dbname,
                CONFIG_HOST: host,
                CONFIG_SCHEMA: schema,
                CONFIG_URL: url,
                CONFIG_WHITELIST: whitelist,
                CONFIG_BLACKLIST: blacklist,
            },
        )

        snapshot = default_registry().assemble(driver, config)

        output_snapshot(snapshot, output_path=output, output_format=output_format, pretty=pretty)

    except DriverNotFoundError as e:
        error_message(str(e), hint="Run 'schema-snapshot drivers' to list the available drivers")
        raise typer.Exit(1) from e
    except ConfigError as e:
        error_message(str(e), hint="Pass the key as an option or in the --config file")
        raise typer.Exit(1) from e
    except DatabaseConnectionError as e:
        error_message(str(e), hint="Check the data source and provider")
        raise typer.Exit(1) from e
    except QueryError as e:
        error_message(str(e))
        raise typer.Exit(1) from e
    except SnapshotError as e:
        error_message(f"Failed to assemble schema snapshot: {e}")
        raise typer.Exit(1) from e


def driver_main(
    driver: str = typer.Argument("sqlce", help="Driver name"),
) -> None:
    """Read a JSON configuration object on stdin and write the snapshot JSON to stdout.

    On failure a JSON object with an "error" key is written instead and the
    exit code is 1.

    Example:
        echo '{"dbname": "Northwind.sdf"}' | schema-snapshot driver-main sqlce
    """
    try:
        values = json.loads(sys.stdin.read() or "{}")
        if not isinstance(values, dict):
            raise ConfigError("stdin", "configuration must be a JSON object")

        snapshot = default_registry().assemble(driver, values)
        typer.echo(snapshot.model_dump_json(by_alias=True))

    except json.JSONDecodeError as e:
        typer.echo(json.dumps({"error": f"invalid configuration JSON: {e}"}))
        raise typer.Exit(1) from e
    except SnapshotError as e:
        typer.echo(json.dumps({"error": str(e)}))
        raise typer.Exit(1) from e


def list_drivers() -> None:
    """List the available drivers."""
    for name in default_registry().names():
        typer.echo(name)
