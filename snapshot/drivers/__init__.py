"""Catalog introspection drivers.

This package provides the driver base class, the whitelist/blacklist filter,
connection handling and the driver registry.
"""

from snapshot.drivers.base import Driver
from snapshot.drivers.engine import create_database_engine, open_connection, sanitize_connection_string
from snapshot.drivers.filters import FilterMode, TableFilter, columns_from_list, tables_from_list
from snapshot.drivers.registry import DriverFactory, DriverRegistry, default_registry

__all__ = [
    # Base
    "Driver",
    # Engine
    "create_database_engine",
    "open_connection",
    "sanitize_connection_string",
    # Filters
    "FilterMode",
    "TableFilter",
    "columns_from_list",
    "tables_from_list",
    # Registry
    "DriverFactory",
    "DriverRegistry",
    "default_registry",
]
