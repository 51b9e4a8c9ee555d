"""Pytest configuration and shared fixtures"""

import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from sqlalchemy import event
from sqlalchemy.engine import Engine

from snapshot.drivers import engine as engine_module

# information_schema tables as SQL Server Compact exposes them (only the
# columns the driver reads)
CATALOG_DDL = [
    "CREATE TABLE tables (table_name TEXT, table_type TEXT)",
    """
    CREATE TABLE columns (
        table_name TEXT,
        column_name TEXT,
        ordinal_position INTEGER,
        column_default TEXT,
        is_nullable TEXT,
        data_type TEXT,
        character_maximum_length INTEGER,
        numeric_precision INTEGER,
        numeric_scale INTEGER,
        autoinc_next INTEGER
    )
    """,
    "CREATE TABLE table_constraints (constraint_name TEXT, table_name TEXT, constraint_type TEXT)",
    "CREATE TABLE key_column_usage (constraint_name TEXT, table_name TEXT, column_name TEXT, ordinal_position INTEGER)",
    "CREATE TABLE referential_constraints (constraint_name TEXT, unique_constraint_name TEXT)",
]

TABLES = [
    ("orders", "TABLE"),
    ("customers", "TABLE"),
    ("audit_log", "TABLE"),
    ("order_items", "TABLE"),
    ("active_orders", "VIEW"),
]

# (table, column, ordinal, default, nullable, type, length, precision, scale, autoinc_next)
# Rows are deliberately not in ordinal order.
COLUMNS = [
    ("customers", "name", 3, None, "YES", "nvarchar", 100, None, None, None),
    ("customers", "region", 1, None, "NO", "nchar", 2, None, None, None),
    ("customers", "code", 2, None, "NO", "nvarchar", 10, None, None, None),
    ("customers", "email", 4, None, "YES", "nvarchar", 255, None, None, None),
    ("customers", "created", 5, "(getdate())", "YES", "datetime", None, None, None, None),
    ("customers", "version", 6, None, "NO", "rowversion", 8, None, None, None),
    ("orders", "id", 1, None, "NO", "int", None, 10, 0, 1001),
    ("orders", "customer_region", 2, None, "NO", "nchar", 2, None, None, None),
    ("orders", "customer_code", 3, None, "NO", "nvarchar", 10, None, None, None),
    ("orders", "total", 4, None, "YES", "numeric", None, 18, 2, None),
    ("orders", "note", 6, "NULL", "YES", "ntext", None, None, None, None),
    ("orders", "shipped", 5, "0", "NO", "bit", None, None, None, None),
    ("order_items", "order_id", 1, None, "NO", "int", None, 10, 0, None),
    ("order_items", "product_id", 2, None, "NO", "uniqueidentifier", None, None, None, None),
    ("order_items", "quantity", 3, "1", "NO", "smallint", None, 5, 0, None),
    ("order_items", "weight", 4, None, "YES", "float", None, 53, None, None),
    ("audit_log", "message", 1, None, "YES", "ntext", None, None, None, None),
    ("audit_log", "logged_at", 2, None, "NO", "datetime", None, None, None, None),
    ("audit_log", "stamp", 3, None, "YES", "timestamp", 8, None, None, None),
    ("active_orders", "id", 1, None, "NO", "int", None, 10, 0, None),
]

TABLE_CONSTRAINTS = [
    ("PK_customers", "customers", "PRIMARY KEY"),
    ("UQ_customers_email", "customers", "UNIQUE"),
    ("PK_orders", "orders", "PRIMARY KEY"),
    ("FK_orders_customers", "orders", "FOREIGN KEY"),
    ("PK_order_items", "order_items", "PRIMARY KEY"),
    ("FK_order_items_orders", "order_items", "FOREIGN KEY"),
]

KEY_COLUMN_USAGE = [
    ("PK_customers", "customers", "code", 2),
    ("PK_customers", "customers", "region", 1),
    ("UQ_customers_email", "customers", "email", 1),
    ("PK_orders", "orders", "id", 1),
    ("FK_orders_customers", "orders", "customer_region", 1),
    ("FK_orders_customers", "orders", "customer_code", 2),
    ("PK_order_items", "order_items", "order_id", 1),
    ("PK_order_items", "order_items", "product_id", 2),
    ("FK_order_items_orders", "order_items", "order_id", 1),
]

REFERENTIAL_CONSTRAINTS = [
    ("FK_orders_customers", "PK_customers"),
    ("FK_order_items_orders", "PK_orders"),
]


def build_catalog(path: Path, extra_columns: list[tuple[Any, ...]] | None = None) -> Path:
    """Write a SQL CE shaped information_schema into a SQLite file"""
    conn = sqlite3.connect(path)
    for ddl in CATALOG_DDL:
        conn.execute(ddl)
    conn.executemany("INSERT INTO tables VALUES (?, ?)", TABLES)
    conn.executemany("INSERT INTO columns VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)", COLUMNS + (extra_columns or []))
    conn.executemany("INSERT INTO table_constraints VALUES (?, ?, ?)", TABLE_CONSTRAINTS)
    conn.executemany("INSERT INTO key_column_usage VALUES (?, ?, ?, ?)", KEY_COLUMN_USAGE)
    conn.executemany("INSERT INTO referential_constraints VALUES (?, ?)", REFERENTIAL_CONSTRAINTS)
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def attach_catalog() -> Iterator[Callable[[Path], None]]:
    """Attach a catalog file as schema information_schema on every new connection"""
    real_create_engine = engine_module.create_database_engine
    catalog: dict[str, Path] = {}

    def create_with_catalog(connection_string: str) -> Engine:
        engine = real_create_engine(connection_string)

        @event.listens_for(engine, "connect")
        def _attach(dbapi_connection: Any, connection_record: Any) -> None:
            if "path" in catalog:
                dbapi_connection.execute(f"ATTACH DATABASE '{catalog['path']}' AS information_schema")

        return engine

    def use(path: Path) -> None:
        catalog["path"] = path

    with patch("snapshot.drivers.engine.create_database_engine", side_effect=create_with_catalog):
        yield use


@pytest.fixture
def sqlce_url(tmp_path: Path, attach_catalog: Callable[[Path], None]) -> str:
    """Return a database URL whose connections see the sample SQL CE catalog"""
    attach_catalog(build_catalog(tmp_path / "information_schema.db"))
    return f"sqlite:///{tmp_path / 'northwind.db'}"


@pytest.fixture
def sqlce_config(sqlce_url: str) -> dict[str, Any]:
    """Return a driver configuration pointing at the sample catalog"""
    return {"dbname": "Northwind.sdf", "host": "Microsoft.SQLSERVER.CE.OLEDB.4.0", "url": sqlce_url}


@pytest.fixture
def catalog_factory() -> Callable[..., Path]:
    """Return the catalog builder, for tests that need a modified catalog"""
    return build_catalog
