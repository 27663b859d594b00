"""MySQL dialect adapter."""

from typing import Any

from semql.core.dimension import TimeGranularity
from semql.db.base import BaseDialectAdapter, require_expression, to_granularity
from semql.db.types import AnsiSqlType, GenericType

_TYPE_MAPPING = {
    "SMALLINT": AnsiSqlType.SMALLINT,
    "MEDIUMINT": AnsiSqlType.INTEGER,
    "INT": AnsiSqlType.INTEGER,
    "INTEGER": AnsiSqlType.INTEGER,
    "BIGINT": AnsiSqlType.BIGINT,
    "DECIMAL": AnsiSqlType.DECIMAL,
    "DEC": AnsiSqlType.DECIMAL,
    "NUMERIC": AnsiSqlType.DECIMAL,
    "FLOAT": AnsiSqlType.FLOAT,
    "DOUBLE": AnsiSqlType.DOUBLE,
    "DOUBLE PRECISION": AnsiSqlType.DOUBLE,
    "REAL": AnsiSqlType.DOUBLE,
    "BIT": AnsiSqlType.BOOLEAN,
    "BOOL": AnsiSqlType.BOOLEAN,
    "BOOLEAN": AnsiSqlType.BOOLEAN,
    "CHAR": AnsiSqlType.CHAR,
    "VARCHAR": AnsiSqlType.VARCHAR,
    "TEXT": AnsiSqlType.TEXT,
    "TINYTEXT": AnsiSqlType.TEXT,
    "MEDIUMTEXT": AnsiSqlType.TEXT,
    "LONGTEXT": AnsiSqlType.TEXT,
    "BINARY": AnsiSqlType.BINARY,
    "VARBINARY": AnsiSqlType.VARBINARY,
    "BLOB": AnsiSqlType.BLOB,
    "TINYBLOB": AnsiSqlType.BLOB,
    "MEDIUMBLOB": AnsiSqlType.BLOB,
    "LONGBLOB": AnsiSqlType.BLOB,
    "DATE": AnsiSqlType.DATE,
    "TIME": AnsiSqlType.TIME,
    "DATETIME": AnsiSqlType.TIMESTAMP,
    "TIMESTAMP": AnsiSqlType.TIMESTAMP,
    "YEAR": AnsiSqlType.SMALLINT,
    "JSON": AnsiSqlType.TEXT,
    # Spatial types
    "GEOMETRY": AnsiSqlType.VARBINARY,
    "POINT": AnsiSqlType.VARBINARY,
    "LINESTRING": AnsiSqlType.VARBINARY,
    "POLYGON": AnsiSqlType.VARBINARY,
    "MULTIPOINT": AnsiSqlType.VARBINARY,
    "MULTILINESTRING": AnsiSqlType.VARBINARY,
    "MULTIPOLYGON": AnsiSqlType.VARBINARY,
    "GEOMETRYCOLLECTION": AnsiSqlType.VARBINARY,
}


class MySQLAdapter(BaseDialectAdapter):
    """MySQL dialect adapter.

    BETWEEN is rendered through the corrected operator in
    :mod:`semql.sql.operators`.
    """

    quote_string = "`"
    type_mapping = _TYPE_MAPPING

    @property
    def name(self) -> str:
        return "mysql"

    @property
    def sqlglot_dialect(self) -> str:
        return "mysql"

    def apply_time_granularity(self, date_expr: str, granularity: TimeGranularity | str) -> str:
        require_expression(date_expr)
        granularity = to_granularity(granularity)

        if granularity == TimeGranularity.YEAR:
            return f"DATE_FORMAT({date_expr}, '%Y-01-01')"
        if granularity == TimeGranularity.QUARTER:
            return (
                f"CASE QUARTER({date_expr}) "
                f"WHEN 1 THEN CONCAT(YEAR({date_expr}), '-01-01') "
                f"WHEN 2 THEN CONCAT(YEAR({date_expr}), '-04-01') "
                f"WHEN 3 THEN CONCAT(YEAR({date_expr}), '-07-01') "
                f"WHEN 4 THEN CONCAT(YEAR({date_expr}), '-10-01') "
                "END"
            )
        if granularity == TimeGranularity.MONTH:
            return f"DATE_FORMAT({date_expr}, '%Y-%m-01')"
        if granularity == TimeGranularity.WEEK:
            return f"DATE_SUB({date_expr}, INTERVAL WEEKDAY({date_expr}) DAY)"
        if granularity == TimeGranularity.DAY:
            return f"DATE_FORMAT({date_expr}, '%Y-%m-%d')"
        if granularity == TimeGranularity.HOUR:
            return f"DATE_FORMAT({date_expr}, '%Y-%m-%d %H:00:00')"
        if granularity == TimeGranularity.MINUTE:
            return f"DATE_FORMAT({date_expr}, '%Y-%m-%d %H:%i:00')"
        return f"DATE_FORMAT({date_expr}, '%Y-%m-%d %H:%i:%s')"

    def to_ansi_sql_type(
        self,
        native_type: str,
        generic_type: GenericType | str | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> AnsiSqlType:
        if (native_type or "").strip().upper() in ("TINYINT", "TINYINT UNSIGNED"):
            # TINYINT(1) is MySQL's boolean; without a precision assume the same
            if precision is None or precision == 1:
                return AnsiSqlType.BOOLEAN
            return AnsiSqlType.TINYINT
        return super().to_ansi_sql_type(native_type, generic_type, precision, scale)

    def normalize_value(self, native_type: str, value: Any) -> Any:
        if value is None:
            return None

        key = (native_type or "").strip().upper()
        if key == "BIT" and isinstance(value, bytes | bytearray):
            return len(value) > 0 and value[0] != 0
        if key == "TINYINT" and isinstance(value, int) and not isinstance(value, bool):
            return value != 0
        return value
