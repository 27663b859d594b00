"""Normalized (ANSI) column types and driver-neutral type codes."""

from enum import Enum


class AnsiSqlType(str, Enum):
    """Normalized ANSI SQL type used to unify backend column types."""

    # Character
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    TEXT = "TEXT"

    # Numeric
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    DECIMAL = "DECIMAL"
    REAL = "REAL"
    DOUBLE = "DOUBLE"
    FLOAT = "FLOAT"

    BOOLEAN = "BOOLEAN"

    # Date and time
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"

    # Binary
    BINARY = "BINARY"
    VARBINARY = "VARBINARY"
    BLOB = "BLOB"

    STRUCT = "STRUCT"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


class GenericType(str, Enum):
    """Driver-neutral column type code reported alongside the native type name."""

    CHAR = "CHAR"
    NCHAR = "NCHAR"
    VARCHAR = "VARCHAR"
    NVARCHAR = "NVARCHAR"
    LONGVARCHAR = "LONGVARCHAR"
    LONGNVARCHAR = "LONGNVARCHAR"
    CLOB = "CLOB"
    NCLOB = "NCLOB"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    DECIMAL = "DECIMAL"
    NUMERIC = "NUMERIC"
    REAL = "REAL"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    BIT = "BIT"
    DATE = "DATE"
    TIME = "TIME"
    TIME_WITH_TIMEZONE = "TIME_WITH_TIMEZONE"
    TIMESTAMP = "TIMESTAMP"
    TIMESTAMP_WITH_TIMEZONE = "TIMESTAMP_WITH_TIMEZONE"
    BINARY = "BINARY"
    VARBINARY = "VARBINARY"
    LONGVARBINARY = "LONGVARBINARY"
    BLOB = "BLOB"
    STRUCT = "STRUCT"
    ARRAY = "ARRAY"
    OTHER = "OTHER"
    NULL = "NULL"


_GENERIC_TO_ANSI = {
    GenericType.CHAR: AnsiSqlType.CHAR,
    GenericType.NCHAR: AnsiSqlType.CHAR,
    GenericType.VARCHAR: AnsiSqlType.VARCHAR,
    GenericType.NVARCHAR: AnsiSqlType.VARCHAR,
    GenericType.LONGVARCHAR: AnsiSqlType.TEXT,
    GenericType.LONGNVARCHAR: AnsiSqlType.TEXT,
    GenericType.CLOB: AnsiSqlType.TEXT,
    GenericType.NCLOB: AnsiSqlType.TEXT,
    GenericType.TINYINT: AnsiSqlType.TINYINT,
    GenericType.SMALLINT: AnsiSqlType.SMALLINT,
    GenericType.INTEGER: AnsiSqlType.INTEGER,
    GenericType.BIGINT: AnsiSqlType.BIGINT,
    GenericType.DECIMAL: AnsiSqlType.DECIMAL,
    GenericType.NUMERIC: AnsiSqlType.DECIMAL,
    GenericType.REAL: AnsiSqlType.REAL,
    GenericType.DOUBLE: AnsiSqlType.DOUBLE,
    GenericType.FLOAT: AnsiSqlType.FLOAT,
    GenericType.BOOLEAN: AnsiSqlType.BOOLEAN,
    GenericType.BIT: AnsiSqlType.BOOLEAN,
    GenericType.DATE: AnsiSqlType.DATE,
    GenericType.TIME: AnsiSqlType.TIME,
    GenericType.TIME_WITH_TIMEZONE: AnsiSqlType.TIME,
    GenericType.TIMESTAMP: AnsiSqlType.TIMESTAMP,
    GenericType.TIMESTAMP_WITH_TIMEZONE: AnsiSqlType.TIMESTAMP,
    GenericType.BINARY: AnsiSqlType.BINARY,
    GenericType.VARBINARY: AnsiSqlType.VARBINARY,
    GenericType.LONGVARBINARY: AnsiSqlType.BLOB,
    GenericType.BLOB: AnsiSqlType.BLOB,
    GenericType.STRUCT: AnsiSqlType.STRUCT,
}


def from_generic_type(generic_type: GenericType | str | None) -> AnsiSqlType:
    """Map a driver-neutral type code to an ANSI type (UNKNOWN when unmapped)."""
    if generic_type is None:
        return AnsiSqlType.UNKNOWN
    if not isinstance(generic_type, GenericType):
        try:
            generic_type = GenericType(generic_type.upper())
        except ValueError:
            return AnsiSqlType.UNKNOWN
    return _GENERIC_TO_ANSI.get(generic_type, AnsiSqlType.UNKNOWN)
