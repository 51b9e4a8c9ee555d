"""SQL Server Compact type mapping utilities."""

from typing import NamedTuple

from snapshot.models import CanonicalType

# Types whose value the database writes itself on every insert/update
ROW_VERSION_TYPES = frozenset({"timestamp", "rowversion"})

# Types whose precision and scale are part of the full type
PRECISION_TYPES = frozenset({"numeric", "decimal", "dec"})


class TypeTranslation(NamedTuple):
    """Result of translating one raw column type"""

    type: CanonicalType
    db_type: str
    auto_generated: bool
    use_auto_default: bool


def translate_column_type(db_type: str, nullable: bool) -> TypeTranslation:
    """Map a SQL CE column type to its canonical type tag.

    Unknown types map to a string tag, so this never fails.

    Args:
        db_type: The database column type (e.g., 'nvarchar', 'bigint')
        nullable: Whether the column accepts NULL

    Returns:
        TypeTranslation with the canonical type, the (possibly renamed) raw
        type, and whether the column is database maintained
    """
    raw = db_type.strip().lower()

    if nullable:
        canonical = _nullable_type(raw)
    else:
        canonical = _not_null_type(raw)

    if raw == "uniqueidentifier":
        db_type = "uuid"

    row_version = raw in ROW_VERSION_TYPES
    return TypeTranslation(
        type=canonical,
        db_type=db_type,
        auto_generated=row_version,
        use_auto_default=row_version,
    )


def _nullable_type(raw: str) -> CanonicalType:
    match raw:
        case "tinyint":
            return CanonicalType.NULL_INT8
        case "smallint":
            return CanonicalType.NULL_INT16
        case "mediumint":
            return CanonicalType.NULL_INT32
        case "int":
            return CanonicalType.NULL_INT
        case "bigint":
            return CanonicalType.NULL_INT64
        case "real":
            return CanonicalType.NULL_FLOAT32
        case "float":
            return CanonicalType.NULL_FLOAT64
        case "boolean" | "bool" | "bit":
            return CanonicalType.NULL_BOOL
        case "date" | "datetime" | "datetime2" | "smalldatetime" | "time":
            return CanonicalType.NULL_TIME
        case "binary" | "varbinary" | "image":
            return CanonicalType.NULL_BYTES
        case "timestamp" | "rowversion":
            return CanonicalType.NULL_BYTES
        case "xml" | "uniqueidentifier":
            return CanonicalType.NULL_STRING
        case "numeric" | "decimal" | "dec" | "money":
            return CanonicalType.NULL_DECIMAL
        case _:
            return CanonicalType.NULL_STRING


def _not_null_type(raw: str) -> CanonicalType:
    match raw:
        case "tinyint":
            return CanonicalType.INT8
        case "smallint":
            return CanonicalType.INT16
        case "mediumint":
            return CanonicalType.INT32
        case "int":
            return CanonicalType.INT
        case "bigint":
            return CanonicalType.INT64
        case "real":
            return CanonicalType.FLOAT32
        case "float":
            return CanonicalType.FLOAT64
        case "boolean" | "bool" | "bit":
            return CanonicalType.BOOL
        case "date" | "datetime" | "datetime2" | "smalldatetime" | "time":
            return CanonicalType.TIME
        case "binary" | "varbinary" | "image":
            return CanonicalType.BYTES
        case "timestamp" | "rowversion":
            return CanonicalType.BYTES
        case "xml" | "uniqueidentifier":
            return CanonicalType.STRING
        case "numeric" | "decimal" | "dec" | "money":
            return CanonicalType.DECIMAL
        case _:
            return CanonicalType.STRING


def full_column_type(
    db_type: str,
    character_maximum_length: int | None = None,
    numeric_precision: int | None = None,
    numeric_scale: int | None = None,
) -> str:
    """Build the full declared type of a column, e.g. ``nvarchar(100)``.

    Args:
        db_type: Base type reported by the catalog
        character_maximum_length: Length of character/binary types
        numeric_precision: Precision of numeric types
        numeric_scale: Scale of numeric types

    Returns:
        The base type with its length or precision in parentheses, when known
    """
    if character_maximum_length is not None:
        return f"{db_type}({int(character_maximum_length)})"
    if db_type.lower() in PRECISION_TYPES and numeric_precision is not None:
        return f"{db_type}({int(numeric_precision)},{int(numeric_scale or 0)})"
    return db_type
