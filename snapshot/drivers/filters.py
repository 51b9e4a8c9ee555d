"""Whitelist and blacklist filtering of tables and columns.

Entries are either bare names (``orders``) or scoped column names
(``users.id``). A scope of ``*`` (``*.updated_at``) applies the column entry
to every table. A bare name filters both tables and columns of that name, in
every table. In the whitelist a bare name only widens a column list that
scoped entries already set up for the table, so whitelisting ``orders`` keeps
all of its columns. A non-empty whitelist always wins over the blacklist.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy import bindparam

SEPARATOR = "."
ALL_TABLES = "*"


class FilterMode(str, Enum):
    """How a list of names restricts a query"""

    ALL = "all"
    INCLUDE = "include"
    EXCLUDE = "exclude"


def split_entry(entry: str) -> tuple[str | None, str]:
    """Split a list entry into its table scope and name.

    Args:
        entry: ``name`` or ``table.column``

    Returns:
        Tuple of (table scope or None for bare entries, name)
    """
    table, sep, column = entry.partition(SEPARATOR)
    if not sep:
        return None, entry
    return table, column


def tables_from_list(entries: Sequence[str], include_scoped: bool = False) -> list[str]:
    """Return the table names named by a whitelist or blacklist.

    Args:
        entries: Whitelist or blacklist entries
        include_scoped: Also take the table part of ``table.column`` entries

    Returns:
        Unique table names in first-seen order
    """
    tables: list[str] = []
    for entry in entries:
        scope, name = split_entry(entry)
        if scope is None:
            table = name
        elif include_scoped and scope != ALL_TABLES:
            table = scope
        else:
            continue
        if table and table not in tables:
            tables.append(table)
    return tables


def columns_from_list(entries: Sequence[str], table_name: str, include_bare: bool = False) -> list[str]:
    """Return the column names a whitelist or blacklist names for ``table_name``.

    Args:
        entries: Whitelist or blacklist entries
        table_name: Table the columns belong to
        include_bare: Also take bare entries, which name a column in every table

    Returns:
        Unique column names in first-seen order
    """
    columns: list[str] = []
    for entry in entries:
        scope, name = split_entry(entry)
        if not name:
            continue
        if scope is None:
            if not include_bare:
                continue
        elif scope != table_name and scope != ALL_TABLES:
            continue
        if name not in columns:
            columns.append(name)
    return columns


@dataclass(frozen=True)
class TableFilter:
    """Inclusion/exclusion decision over table and column names"""

    whitelist: tuple[str, ...] = field(default=())
    blacklist: tuple[str, ...] = field(default=())

    @classmethod
    def from_lists(
        cls, whitelist: Sequence[str] | None = None, blacklist: Sequence[str] | None = None
    ) -> "TableFilter":
        return cls(whitelist=tuple(whitelist or ()), blacklist=tuple(blacklist or ()))

    def tables(self) -> tuple[FilterMode, list[str]]:
        """Return the table-level filter mode and the names it applies to."""
        if self.whitelist:
            names = tables_from_list(self.whitelist, include_scoped=True)
            if names:
                return FilterMode.INCLUDE, names
        elif self.blacklist:
            names = tables_from_list(self.blacklist)
            if names:
                return FilterMode.EXCLUDE, names
        return FilterMode.ALL, []

    def columns(self, table_name: str) -> tuple[FilterMode, list[str]]:
        """Return the column-level filter mode for one table."""
        if self.whitelist:
            # Bare entries only join a column list that scoped entries started
            if columns_from_list(self.whitelist, table_name):
                return FilterMode.INCLUDE, columns_from_list(self.whitelist, table_name, include_bare=True)
        elif self.blacklist:
            names = columns_from_list(self.blacklist, table_name, include_bare=True)
            if names:
                return FilterMode.EXCLUDE, names
        return FilterMode.ALL, []

    def includes_table(self, table_name: str) -> bool:
        mode, names = self.tables()
        return _decide(mode, names, table_name)

    def includes_column(self, table_name: str, column_name: str) -> bool:
        mode, names = self.columns(table_name)
        return _decide(mode, names, column_name)

    def table_clause(self, column_expr: str, param: str = "filter_tables") -> tuple[str, dict[str, Any]]:
        """Build the SQL condition restricting ``column_expr`` to the included tables.

        Args:
            column_expr: Column holding the table name, e.g. ``table_name``
            param: Bind parameter name to use

        Returns:
            Tuple of (condition starting with `` AND`` or empty string, bind values)
        """
        mode, names = self.tables()
        return _clause(mode, names, column_expr, param)

    def column_clause(
        self, table_name: str, column_expr: str, param: str = "filter_columns"
    ) -> tuple[str, dict[str, Any]]:
        """Build the SQL condition restricting ``column_expr`` to the included columns."""
        mode, names = self.columns(table_name)
        return _clause(mode, names, column_expr, param)


def expanding_params(values: dict[str, Any]) -> list[Any]:
    """Return expanding bind parameters for the list values in ``values``."""
    return [bindparam(name, expanding=True) for name, value in values.items() if isinstance(value, list)]


def _decide(mode: FilterMode, names: list[str], name: str) -> bool:
    match mode:
        case FilterMode.INCLUDE:
            return name in names
        case FilterMode.EXCLUDE:
            return name not in names
        case _:
            return True


def _clause(mode: FilterMode, names: list[str], column_expr: str, param: str) -> tuple[str, dict[str, Any]]:
    match mode:
        case FilterMode.INCLUDE:
            return f" AND {column_expr} IN :{param}", {param: names}
        case FilterMode.EXCLUDE:
            return f" AND {column_expr} NOT IN :{param}", {param: names}
        case _:
            return "", {}
