"""Abstract base class for database drivers."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from sqlalchemy.engine import Connection

from snapshot.config import CONFIG_BLACKLIST, CONFIG_SCHEMA, CONFIG_WHITELIST, DriverConfig
from snapshot.drivers.engine import open_connection
from snapshot.drivers.filters import TableFilter
from snapshot.models import Column, Dialect, ForeignKey, PrimaryKey, SchemaSnapshot, Table

logger = logging.getLogger(__name__)


class Driver(ABC):
    """Abstract base class for catalog introspection drivers.

    Subclasses implement the catalog queries and the type translation.
    ``assemble`` runs them over a single connection and builds the snapshot.
    """

    # Override in subclasses
    name: ClassVar[str] = ""
    default_schema: ClassVar[str] = ""
    dialect: ClassVar[Dialect]

    @abstractmethod
    def connection_string(self, config: DriverConfig) -> str:
        """Build the SQLAlchemy URL used to connect.

        Args:
            config: Driver configuration

        Returns:
            Database URL

        Raises:
            ConfigError: If a required key is missing
        """

    @abstractmethod
    def table_names(self, conn: Connection, schema: str, filters: TableFilter) -> list[str]:
        """Return the names of the included tables in ascending order."""

    @abstractmethod
    def columns(self, conn: Connection, schema: str, table_name: str, filters: TableFilter) -> list[Column]:
        """Return the included columns of a table in ordinal order, untranslated."""

    @abstractmethod
    def primary_key_info(self, conn: Connection, schema: str, table_name: str) -> PrimaryKey | None:
        """Return the primary key of a table, or None if it has none."""

    @abstractmethod
    def foreign_key_info(self, conn: Connection, schema: str, table_name: str) -> list[ForeignKey]:
        """Return one record per foreign key column pair of a table."""

    @abstractmethod
    def translate_column_type(self, column: Column) -> Column:
        """Return a copy of ``column`` with its canonical type filled in."""

    def assemble(self, config: DriverConfig | Mapping[str, Any]) -> SchemaSnapshot:
        """Introspect the configured database and return its schema snapshot.

        Either the complete snapshot is returned or an error is raised; a
        partially built snapshot is never returned.

        Args:
            config: Driver configuration

        Returns:
            SchemaSnapshot of the configured schema

        Raises:
            ConfigError: If the configuration is incomplete
            DatabaseConnectionError: If the connection cannot be opened or closed
            QueryError: If a catalog query fails
        """
        if not isinstance(config, DriverConfig):
            config = DriverConfig(config)

        schema = config.default_string(CONFIG_SCHEMA, self.default_schema)
        filters = TableFilter.from_lists(
            whitelist=config.string_slice(CONFIG_WHITELIST),
            blacklist=config.string_slice(CONFIG_BLACKLIST),
        )
        connection_string = self.connection_string(config)

        with open_connection(connection_string) as conn:
            tables = self.tables(conn, schema, filters)

        snapshot = SchemaSnapshot(schema=schema, dialect=self.dialect, tables=tuple(tables))
        logger.info(f"Assembled {len(snapshot.tables)} tables from schema '{schema}' with the {self.name} driver")
        return snapshot

    def tables(self, conn: Connection, schema: str, filters: TableFilter) -> list[Table]:
        """Introspect every included table, its columns and keys.

        Args:
            conn: Open connection
            schema: Schema name
            filters: Whitelist/blacklist filter

        Returns:
            List of Table objects in table name order
        """
        tables = []
        for table_name in self.table_names(conn, schema, filters):
            columns = [self.translate_column_type(c) for c in self.columns(conn, schema, table_name, filters)]
            primary_key = self.primary_key_info(conn, schema, table_name)
            foreign_keys = self.foreign_key_info(conn, schema, table_name)

            logger.debug(
                f"Table '{table_name}': {len(columns)} columns, "
                f"primary key {primary_key.name if primary_key else 'none'}, {len(foreign_keys)} foreign key columns"
            )
            tables.append(
                Table(
                    name=table_name,
                    columns=tuple(columns),
                    primary_key=primary_key,
                    foreign_keys=tuple(foreign_keys),
                )
            )

        return tables
