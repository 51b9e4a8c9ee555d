"""SQL Server Compact catalog introspection.

All metadata comes from ``information_schema``. SQL CE has no schemas, so
the schema name is carried into the snapshot but not used in the queries.
"""

import logging
from typing import ClassVar

from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.engine import URL, Connection

from snapshot.config import CONFIG_DB_NAME, CONFIG_HOST, CONFIG_URL, DriverConfig
from snapshot.drivers.base import Driver
from snapshot.drivers.filters import TableFilter, expanding_params
from snapshot.drivers.sqlce.type_mapping import full_column_type, translate_column_type
from snapshot.errors import ScanError
from snapshot.models import AUTO_DEFAULT, Column, Dialect, ForeignKey, PrimaryKey

logger = logging.getLogger(__name__)

TABLE_NAMES_QUERY = """
    SELECT table_name
    FROM   information_schema.tables
    WHERE  table_type = 'TABLE'"""

COLUMNS_QUERY = """
    SELECT c.column_name,
           c.data_type,
           c.character_maximum_length,
           c.numeric_precision,
           c.numeric_scale,
           c.column_default,
           CASE
             WHEN c.is_nullable = 'YES' THEN 1
             ELSE 0
           END AS is_nullable,
           CASE
             WHEN c.column_name IN (SELECT kcu.column_name
                                    FROM   information_schema.table_constraints tc
                                      INNER JOIN information_schema.key_column_usage kcu
                                              ON tc.constraint_name = kcu.constraint_name
                                             AND tc.table_name = kcu.table_name
                                    WHERE  tc.table_name = c.table_name
                                    AND    (tc.constraint_type = 'PRIMARY KEY' OR tc.constraint_type = 'UNIQUE'))
               THEN 1
             ELSE 0
           END AS is_unique,
           CASE
             WHEN c.autoinc_next IS NOT NULL THEN 1
             ELSE 0
           END AS is_identity
    FROM   information_schema.columns c
    WHERE  c.table_name = :table_name"""

PRIMARY_KEY_QUERY = """
    SELECT constraint_name
    FROM   information_schema.table_constraints
    WHERE  table_name = :table_name AND constraint_type = 'PRIMARY KEY'"""

PRIMARY_KEY_COLUMNS_QUERY = """
    SELECT column_name
    FROM   information_schema.key_column_usage
    WHERE  table_name = :table_name AND constraint_name = :constraint_name
    ORDER BY ordinal_position"""

FOREIGN_KEYS_QUERY = """
    SELECT rc.constraint_name,
           l.table_name AS local_table,
           l.column_name AS local_column,
           f.table_name AS foreign_table,
           f.column_name AS foreign_column
    FROM   information_schema.referential_constraints rc
      INNER JOIN information_schema.key_column_usage l
              ON l.constraint_name = rc.constraint_name
      INNER JOIN information_schema.key_column_usage f
              ON f.constraint_name = rc.unique_constraint_name
             AND f.ordinal_position = l.ordinal_position
    WHERE  l.table_name = :table_name
    ORDER BY rc.constraint_name, local_table, local_column, foreign_table, foreign_column"""


def ado_connection_string(provider: str, data_source: str) -> str:
    """Build the OLE DB connection string for a SQL CE database file."""
    return f"Provider={provider};Data Source={data_source}"


class SQLCEDriver(Driver):
    """Driver for Microsoft SQL Server Compact databases."""

    name: ClassVar[str] = "sqlce"
    default_schema: ClassVar[str] = "dbo"
    dialect: ClassVar[Dialect] = Dialect(
        lq="[",
        rq="]",
        use_index_placeholders=False,
        use_schema=False,
        use_default_keyword=True,
        use_auto_columns=True,
        use_top_clause=True,
        use_output_clause=True,
        use_case_when_exists_clause=True,
    )

    def connection_string(self, config: DriverConfig) -> str:
        """Build the connection URL from ``dbname`` (data source) and ``host`` (provider).

        An explicit ``url`` key takes precedence over the built URL.
        """
        data_source = config.must_string(CONFIG_DB_NAME)
        provider = config.default_string(CONFIG_HOST, "")

        url = config.default_string(CONFIG_URL, "")
        if url:
            return url

        odbc_connect = ado_connection_string(provider, data_source)
        return URL.create("mssql+pyodbc", query={"odbc_connect": odbc_connect}).render_as_string(hide_password=False)

    def table_names(self, conn: Connection, schema: str, filters: TableFilter) -> list[str]:
        clause, params = filters.table_clause("table_name")
        query = text(TABLE_NAMES_QUERY + clause + "\n    ORDER BY table_name").bindparams(*expanding_params(params))

        names = list(conn.execute(query, params).scalars().all())
        logger.debug(f"Found {len(names)} tables")
        return names

    def columns(self, conn: Connection, schema: str, table_name: str, filters: TableFilter) -> list[Column]:
        """Query the columns of a table from ``information_schema.columns``.

        The row data is decoded after the result is fully fetched.

        Raises:
            ScanError: If a row cannot be decoded into a Column
        """
        clause, params = filters.column_clause(table_name, "c.column_name")
        params["table_name"] = table_name
        query = text(COLUMNS_QUERY + clause + "\n    ORDER BY c.ordinal_position").bindparams(
            *expanding_params(params)
        )

        rows = conn.execute(query, params).all()

        columns = []
        for row in rows:
            try:
                columns.append(self._decode_column(tuple(row)))
            except (ValidationError, AttributeError, TypeError, ValueError) as e:
                raise ScanError(table_name, str(e)) from e

        return columns

    @staticmethod
    def _decode_column(row: tuple) -> Column:
        (
            name,
            db_type,
            character_maximum_length,
            numeric_precision,
            numeric_scale,
            default_value,
            nullable,
            unique,
            identity,
        ) = row

        if default_value is not None and default_value != "NULL":
            default = str(default_value)
        elif identity:
            default = AUTO_DEFAULT
        else:
            default = ""

        return Column(
            name=name,
            db_type=db_type,
            full_db_type=full_column_type(db_type, character_maximum_length, numeric_precision, numeric_scale),
            nullable=bool(nullable),
            unique=bool(unique),
            default=default,
        )

    def primary_key_info(self, conn: Connection, schema: str, table_name: str) -> PrimaryKey | None:
        row = conn.execute(text(PRIMARY_KEY_QUERY), {"table_name": table_name}).first()
        if row is None:
            return None

        constraint_name = row[0]
        columns = conn.execute(
            text(PRIMARY_KEY_COLUMNS_QUERY),
            {"table_name": table_name, "constraint_name": constraint_name},
        ).scalars().all()

        return PrimaryKey(name=constraint_name, columns=tuple(columns))

    def foreign_key_info(self, conn: Connection, schema: str, table_name: str) -> list[ForeignKey]:
        rows = conn.execute(text(FOREIGN_KEYS_QUERY), {"table_name": table_name}).all()

        foreign_keys = []
        for row in rows:
            try:
                constraint_name, _local_table, local_column, foreign_table, foreign_column = row
                foreign_keys.append(
                    ForeignKey(
                        name=constraint_name,
                        table=table_name,
                        column=local_column,
                        foreign_table=foreign_table,
                        foreign_column=foreign_column,
                    )
                )
            except (ValidationError, AttributeError, TypeError, ValueError) as e:
                raise ScanError(table_name, str(e)) from e

        return foreign_keys

    def translate_column_type(self, column: Column) -> Column:
        """Fill in the canonical type of a column.

        Row version columns are flagged as auto generated and, lacking a
        default of their own, get the ``auto`` default so inserts skip them.
        """
        translation = translate_column_type(column.db_type, column.nullable)

        update = {
            "type": translation.type,
            "db_type": translation.db_type,
            "auto_generated": translation.auto_generated,
        }
        if translation.use_auto_default and not column.default:
            update["default"] = AUTO_DEFAULT

        return column.model_copy(update=update)
