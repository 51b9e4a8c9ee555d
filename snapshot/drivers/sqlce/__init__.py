"""SQL Server Compact driver."""

from snapshot.drivers.sqlce.driver import SQLCEDriver, ado_connection_string
from snapshot.drivers.sqlce.type_mapping import TypeTranslation, full_column_type, translate_column_type

__all__ = [
    "SQLCEDriver",
    "TypeTranslation",
    "ado_connection_string",
    "full_column_type",
    "translate_column_type",
]
