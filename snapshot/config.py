"""Driver configuration with typed accessors."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from snapshot.errors import ConfigError

# Well-known configuration keys
CONFIG_DB_NAME = "dbname"
CONFIG_HOST = "host"
CONFIG_PORT = "port"
CONFIG_USER = "user"
CONFIG_PASS = "pass"
CONFIG_SSLMODE = "sslmode"
CONFIG_SCHEMA = "schema"
CONFIG_WHITELIST = "whitelist"
CONFIG_BLACKLIST = "blacklist"
CONFIG_URL = "url"

_MISSING = object()


class DriverConfig(Mapping[str, Any]):
    """Read-only key/value configuration handed to a driver.

    The caller's mapping is copied on construction, so later changes to it are
    not observed and the driver cannot mutate it.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: Mapping[str, Any] = MappingProxyType(dict(values or {}))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        shown = {k: ("***" if k == CONFIG_PASS else v) for k, v in self._values.items()}
        return f"DriverConfig({shown!r})"

    def must_string(self, key: str) -> str:
        """Return a required, non-empty string value.

        Raises:
            ConfigError: If the key is absent, empty, or not a string
        """
        value = self._values.get(key, _MISSING)
        if value is _MISSING or value is None:
            raise ConfigError(key, "is required")
        if not isinstance(value, str):
            raise ConfigError(key, f"must be a string, got {type(value).__name__}")
        if not value:
            raise ConfigError(key, "must not be empty")
        return value

    def default_string(self, key: str, default: str) -> str:
        """Return a string value, or ``default`` when the key is absent or empty."""
        value = self._values.get(key)
        if value is None or value == "":
            return default
        if not isinstance(value, str):
            raise ConfigError(key, f"must be a string, got {type(value).__name__}")
        return value

    def must_int(self, key: str) -> int:
        """Return a required integer value.

        Whole-number floats are accepted since JSON decoders may produce them.
        """
        value = self._values.get(key, _MISSING)
        if value is _MISSING or value is None:
            raise ConfigError(key, "is required")
        return self._as_int(key, value)

    def default_int(self, key: str, default: int) -> int:
        value = self._values.get(key)
        if value is None:
            return default
        return self._as_int(key, value)

    def default_bool(self, key: str, default: bool) -> bool:
        value = self._values.get(key)
        if value is None:
            return default
        if not isinstance(value, bool):
            raise ConfigError(key, f"must be a boolean, got {type(value).__name__}")
        return value

    def string_slice(self, key: str) -> list[str]:
        """Return a list of strings, or an empty list when the key is absent.

        A comma separated string is split into its non-empty, stripped parts.

        Raises:
            ConfigError: If the value is neither a string nor a sequence of strings
        """
        value = self._values.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        if not isinstance(value, list | tuple):
            raise ConfigError(key, f"must be a list of strings, got {type(value).__name__}")

        items = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigError(key, f"must be a list of strings, found {type(item).__name__}")
            items.append(item)
        return items

    @staticmethod
    def _as_int(key: str, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(key, "must be an integer, got bool")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ConfigError(key, f"must be an integer, got {type(value).__name__}")
