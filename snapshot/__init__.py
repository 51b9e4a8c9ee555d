"""Schema snapshots of live databases for code generators.

A driver reads the database catalog and returns a ``SchemaSnapshot``: the
tables, their columns with canonical type tags, and their keys.
"""

from snapshot.config import DriverConfig
from snapshot.drivers import Driver, DriverRegistry, default_registry
from snapshot.errors import (
    ConfigError,
    DatabaseConnectionError,
    DriverNotFoundError,
    QueryError,
    ScanError,
    SnapshotError,
)
from snapshot.models import (
    AUTO_DEFAULT,
    CanonicalType,
    Column,
    Dialect,
    ForeignKey,
    PrimaryKey,
    SchemaSnapshot,
    Table,
)

__version__ = "0.1.0"

__all__ = [
    "AUTO_DEFAULT",
    "CanonicalType",
    "Column",
    "ConfigError",
    "DatabaseConnectionError",
    "Dialect",
    "Driver",
    "DriverConfig",
    "DriverNotFoundError",
    "DriverRegistry",
    "ForeignKey",
    "PrimaryKey",
    "QueryError",
    "ScanError",
    "SchemaSnapshot",
    "SnapshotError",
    "Table",
    "default_registry",
]
