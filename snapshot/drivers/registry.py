"""Explicit name to driver mapping owned by the host."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from snapshot.drivers.base import Driver
from snapshot.errors import DriverNotFoundError
from snapshot.models import SchemaSnapshot

logger = logging.getLogger(__name__)

DriverFactory = Callable[[], Driver]


class DriverRegistry:
    """Registry of driver factories.

    Nothing registers itself: the host builds a registry and adds the
    drivers it wants.
    """

    def __init__(self) -> None:
        self._factories: dict[str, DriverFactory] = {}

    def register(self, name: str, factory: DriverFactory) -> None:
        """Register a driver factory under ``name``.

        Raises:
            ValueError: If the name is empty or already registered
        """
        if not name:
            raise ValueError("Driver name must not be empty")
        if name in self._factories:
            raise ValueError(f"Driver '{name}' is already registered")
        self._factories[name] = factory
        logger.debug(f"Registered driver '{name}'")

    def get(self, name: str) -> Driver:
        """Create a new instance of the driver registered under ``name``.

        Raises:
            DriverNotFoundError: If no driver has that name
        """
        try:
            factory = self._factories[name]
        except KeyError:
            raise DriverNotFoundError(name) from None
        return factory()

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def assemble(self, name: str, config: Mapping[str, Any]) -> SchemaSnapshot:
        """Run the named driver against ``config``."""
        return self.get(name).assemble(config)


def default_registry() -> DriverRegistry:
    """Return a new registry holding the built-in drivers."""
    from snapshot.drivers.sqlce import SQLCEDriver

    registry = DriverRegistry()
    registry.register(SQLCEDriver.name, SQLCEDriver)
    return registry
