"""Command line interface for schema-snapshot."""

from snapshot import __version__

__all__ = ["__version__"]
