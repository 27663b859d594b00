"""Oracle dialect adapter."""

from decimal import Decimal
from typing import Any

from semql.core.dimension import TimeGranularity
from semql.db.base import BaseDialectAdapter, require_expression, to_granularity
from semql.db.types import AnsiSqlType, GenericType

_TYPE_MAPPING = {
    # NUMBER without precision information, see to_ansi_sql_type
    "NUMBER": AnsiSqlType.INTEGER,
    "BINARY_FLOAT": AnsiSqlType.REAL,
    "BINARY_DOUBLE": AnsiSqlType.DOUBLE,
    "FLOAT": AnsiSqlType.FLOAT,
    "VARCHAR2": AnsiSqlType.VARCHAR,
    "NVARCHAR2": AnsiSqlType.VARCHAR,
    "CHAR": AnsiSqlType.CHAR,
    "NCHAR": AnsiSqlType.CHAR,
    "CLOB": AnsiSqlType.TEXT,
    "NCLOB": AnsiSqlType.TEXT,
    "BLOB": AnsiSqlType.BLOB,
    "RAW": AnsiSqlType.VARBINARY,
    "LONG RAW": AnsiSqlType.VARBINARY,
    # Oracle DATE carries a time component
    "DATE": AnsiSqlType.TIMESTAMP,
    "TIMESTAMP": AnsiSqlType.TIMESTAMP,
    "TIMESTAMP WITH TIME ZONE": AnsiSqlType.TIMESTAMP,
    "TIMESTAMP WITH LOCAL TIME ZONE": AnsiSqlType.TIMESTAMP,
    "INTERVAL YEAR TO MONTH": AnsiSqlType.VARCHAR,
    "INTERVAL DAY TO SECOND": AnsiSqlType.VARCHAR,
    "XMLTYPE": AnsiSqlType.TEXT,
    "ROWID": AnsiSqlType.VARCHAR,
    "UROWID": AnsiSqlType.VARCHAR,
    "BFILE": AnsiSqlType.VARCHAR,
    "LONG": AnsiSqlType.TEXT,
}

_TRUNC_FORMATS = {
    TimeGranularity.YEAR: "YEAR",
    TimeGranularity.QUARTER: "Q",
    TimeGranularity.MONTH: "MONTH",
    TimeGranularity.WEEK: "WW",
    TimeGranularity.DAY: "DD",
    TimeGranularity.HOUR: "HH24",
    TimeGranularity.MINUTE: "MI",
}


def _number_type(precision: int, scale: int | None) -> AnsiSqlType:
    if scale == 0 and precision > 0:
        if precision <= 3:
            return AnsiSqlType.TINYINT
        if precision <= 5:
            return AnsiSqlType.SMALLINT
        if precision <= 10:
            return AnsiSqlType.INTEGER
        return AnsiSqlType.BIGINT
    return AnsiSqlType.DECIMAL


class OracleAdapter(BaseDialectAdapter):
    """Oracle dialect adapter."""

    quote_string = '"'
    type_mapping = _TYPE_MAPPING

    @property
    def name(self) -> str:
        return "oracle"

    @property
    def sqlglot_dialect(self) -> str:
        return "oracle"

    def limit_clause(self, limit: int) -> str:
        super().limit_clause(limit)
        return f"FETCH FIRST {limit} ROWS ONLY"

    def apply_time_granularity(self, date_expr: str, granularity: TimeGranularity | str) -> str:
        require_expression(date_expr)
        granularity = to_granularity(granularity)
        if granularity == TimeGranularity.SECOND:
            # TRUNC has no seconds format
            return f"TRUNC({date_expr}, 'MI') + TRUNC(EXTRACT(SECOND FROM {date_expr})) / 86400"
        return f"TRUNC({date_expr}, '{_TRUNC_FORMATS[granularity]}')"

    def to_ansi_sql_type(
        self,
        native_type: str,
        generic_type: GenericType | str | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> AnsiSqlType:
        if (native_type or "").strip().upper() == "NUMBER" and precision is not None:
            return _number_type(precision, scale)
        return super().to_ansi_sql_type(native_type, generic_type, precision, scale)

    def normalize_value(self, native_type: str, value: Any) -> Any:
        if value is None:
            return None

        key = (native_type or "").strip().upper()
        if isinstance(value, Decimal) and key in ("NUMBER", "DECIMAL", "NUMERIC"):
            if value.is_finite() and value.as_tuple().exponent >= 0:
                return int(value)
            return float(value)
        if key in ("CHAR", "NCHAR") and isinstance(value, str):
            return value.strip()
        if key in ("CLOB", "NCLOB") and hasattr(value, "read"):
            return value.read()
        return value
