"""DuckDB dialect adapter."""

from typing import Any

from semql.core.dimension import TimeGranularity
from semql.db.base import BaseDialectAdapter, require_expression, to_granularity
from semql.db.types import AnsiSqlType

_TYPE_MAPPING = {
    "TINYINT": AnsiSqlType.TINYINT,
    "UTINYINT": AnsiSqlType.TINYINT,
    "SMALLINT": AnsiSqlType.SMALLINT,
    "USMALLINT": AnsiSqlType.SMALLINT,
    "INTEGER": AnsiSqlType.INTEGER,
    "INT": AnsiSqlType.INTEGER,
    "UINTEGER": AnsiSqlType.INTEGER,
    "BIGINT": AnsiSqlType.BIGINT,
    "INT8": AnsiSqlType.BIGINT,
    "LONG": AnsiSqlType.BIGINT,
    "UBIGINT": AnsiSqlType.BIGINT,
    # 128-bit integers have no ANSI counterpart
    "HUGEINT": AnsiSqlType.BIGINT,
    "DECIMAL": AnsiSqlType.DECIMAL,
    "NUMERIC": AnsiSqlType.DECIMAL,
    "REAL": AnsiSqlType.FLOAT,
    "FLOAT": AnsiSqlType.FLOAT,
    "FLOAT4": AnsiSqlType.FLOAT,
    "DOUBLE": AnsiSqlType.DOUBLE,
    "FLOAT8": AnsiSqlType.DOUBLE,
    "BOOLEAN": AnsiSqlType.BOOLEAN,
    "BOOL": AnsiSqlType.BOOLEAN,
    "LOGICAL": AnsiSqlType.BOOLEAN,
    "CHAR": AnsiSqlType.CHAR,
    "VARCHAR": AnsiSqlType.VARCHAR,
    "BPCHAR": AnsiSqlType.VARCHAR,
    "STRING": AnsiSqlType.VARCHAR,
    "TEXT": AnsiSqlType.TEXT,
    "BINARY": AnsiSqlType.BINARY,
    "VARBINARY": AnsiSqlType.VARBINARY,
    "BLOB": AnsiSqlType.BLOB,
    "BYTEA": AnsiSqlType.BLOB,
    "DATE": AnsiSqlType.DATE,
    "TIME": AnsiSqlType.TIME,
    "TIMESTAMP": AnsiSqlType.TIMESTAMP,
    "DATETIME": AnsiSqlType.TIMESTAMP,
    "TIMESTAMPTZ": AnsiSqlType.TIMESTAMP,
    "INTERVAL": AnsiSqlType.VARCHAR,
    "UUID": AnsiSqlType.VARCHAR,
    "JSON": AnsiSqlType.TEXT,
    "BIT": AnsiSqlType.BINARY,
    "BITSTRING": AnsiSqlType.BINARY,
    "ARRAY": AnsiSqlType.TEXT,
    "LIST": AnsiSqlType.TEXT,
    "STRUCT": AnsiSqlType.STRUCT,
    "MAP": AnsiSqlType.TEXT,
    "UNION": AnsiSqlType.TEXT,
    "ENUM": AnsiSqlType.VARCHAR,
}


class DuckDBAdapter(BaseDialectAdapter):
    """DuckDB dialect adapter.

    Identifiers are rendered unquoted.
    """

    quote_string = ""
    type_mapping = _TYPE_MAPPING

    @property
    def name(self) -> str:
        return "duckdb"

    @property
    def sqlglot_dialect(self) -> str:
        return "duckdb"

    def apply_time_granularity(self, date_expr: str, granularity: TimeGranularity | str) -> str:
        require_expression(date_expr)
        return f"DATE_TRUNC('{to_granularity(granularity).value}', {date_expr})"

    def normalize_value(self, native_type: str, value: Any) -> Any:
        if value is None:
            return None
        if (native_type or "").upper() in ("BOOLEAN", "BOOL", "LOGICAL") and isinstance(value, int | float):
            return value != 0
        return value
