"""Exception types raised while assembling a schema snapshot."""


class SnapshotError(Exception):
    """Base class for every error surfaced by a driver."""


class ConfigError(SnapshotError):
    """A required configuration key is missing or has the wrong type."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"config key '{key}': {message}")
        self.key = key


class DatabaseConnectionError(SnapshotError):
    """The database connection could not be opened or closed."""


class QueryError(SnapshotError):
    """A catalog query failed."""


class ScanError(QueryError):
    """A catalog row could not be decoded."""

    def __init__(self, table: str, message: str) -> None:
        super().__init__(f"unable to scan for table {table}: {message}")
        self.table = table


class DriverNotFoundError(SnapshotError, KeyError):
    """No driver is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"no driver registered under '{self.name}'"
