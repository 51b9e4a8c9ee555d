"""Pydantic models describing an introspected database schema"""

from enum import Enum

from pydantic import BaseModel, Field

# Default value reported for columns whose value the database maintains itself
AUTO_DEFAULT = "auto"


class CanonicalType(str, Enum):
    """Driver independent type tags handed to the code generator"""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT = "int"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    TIME = "time"
    BYTES = "bytes"
    STRING = "string"
    DECIMAL = "decimal"

    NULL_INT8 = "null.int8"
    NULL_INT16 = "null.int16"
    NULL_INT32 = "null.int32"
    NULL_INT = "null.int"
    NULL_INT64 = "null.int64"
    NULL_FLOAT32 = "null.float32"
    NULL_FLOAT64 = "null.float64"
    NULL_BOOL = "null.bool"
    NULL_TIME = "null.time"
    NULL_BYTES = "null.bytes"
    NULL_STRING = "null.string"
    NULL_DECIMAL = "null.decimal"

    @property
    def nullable(self) -> bool:
        return self.value.startswith("null.")


# ============================================================================
# Dialect
# ============================================================================


class Dialect(BaseModel):
    """SQL syntax and feature flags of the target database"""

    lq: str = Field(description="Left identifier quote character")
    rq: str = Field(description="Right identifier quote character")

    use_index_placeholders: bool = Field(default=False, description="Placeholders are numbered ($1, $2)")
    use_schema: bool = Field(default=False, description="Qualify table names with the schema")
    use_default_keyword: bool = Field(default=True, description="INSERT supports the DEFAULT keyword")

    use_auto_columns: bool = Field(default=False, description="Identity/rowversion columns are skipped on insert")
    use_top_clause: bool = Field(default=False, description="Rows are limited with TOP instead of LIMIT")
    use_output_clause: bool = Field(default=False, description="Returned values come from an OUTPUT clause")
    use_case_when_exists_clause: bool = Field(
        default=False, description="Upserts are written as CASE WHEN EXISTS instead of ON CONFLICT"
    )

    model_config = {"frozen": True}


# ============================================================================
# Tables, Columns and Keys
# ============================================================================


class Column(BaseModel):
    """A single table column"""

    name: str = Field(description="Column name")
    db_type: str = Field(description="Base type as reported by the catalog")
    full_db_type: str = Field(description="Base type with its length or precision, e.g. nvarchar(100)")
    type: CanonicalType | None = Field(default=None, description="Canonical type tag")
    nullable: bool = Field(default=False, description="Whether the column accepts NULL")
    unique: bool = Field(default=False, description="Member of a primary key or unique constraint")
    auto_generated: bool = Field(default=False, description="Value is maintained by the database")
    default: str = Field(default="", description=f"Default expression, '{AUTO_DEFAULT}' or empty")

    model_config = {"frozen": True}


class PrimaryKey(BaseModel):
    """Primary key constraint of a table"""

    name: str = Field(description="Constraint name")
    columns: tuple[str, ...] = Field(default=(), description="Member columns in key order")

    model_config = {"frozen": True}


class ForeignKey(BaseModel):
    """One local/foreign column pair of a foreign key constraint"""

    name: str = Field(description="Constraint name")
    table: str = Field(description="Table owning the constraint")
    column: str = Field(description="Local column")
    foreign_table: str = Field(description="Referenced table")
    foreign_column: str = Field(description="Referenced column")

    model_config = {"frozen": True}


class Table(BaseModel):
    """A table with its columns and keys"""

    name: str = Field(description="Table name")
    columns: tuple[Column, ...] = Field(default=(), description="Columns in ordinal order")
    primary_key: PrimaryKey | None = Field(default=None, description="Primary key, if the table has one")
    foreign_keys: tuple[ForeignKey, ...] = Field(default=(), description="Outgoing foreign key column pairs")

    model_config = {"frozen": True}

    def get_column(self, name: str) -> Column:
        """Return the column called ``name``.

        Raises:
            KeyError: If the table has no such column
        """
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(f"column '{name}' not found in table '{self.name}'")


# ============================================================================
# Snapshot
# ============================================================================


class SchemaSnapshot(BaseModel):
    """Everything a driver reports about one schema"""

    schema_name: str = Field(description="Schema that was introspected", alias="schema")
    dialect: Dialect = Field(description="Dialect of the database")
    tables: tuple[Table, ...] = Field(default=(), description="Tables ordered by name")

    model_config = {"frozen": True, "populate_by_name": True}

    def get_table(self, name: str) -> Table:
        """Return the table called ``name``.

        Raises:
            KeyError: If the snapshot has no such table
        """
        for table in self.tables:
            if table.name == name:
                return table
        raise KeyError(f"table '{name}' not found in snapshot")
