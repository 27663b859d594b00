"""PostgreSQL dialect adapter."""

import json
import re
from decimal import Decimal, InvalidOperation
from typing import Any

from semql.core.dimension import TimeGranularity
from semql.db.base import BaseDialectAdapter, require_expression, to_granularity
from semql.db.types import AnsiSqlType, GenericType, from_generic_type

_TYPE_MAPPING = {
    "int2": AnsiSqlType.SMALLINT,
    "smallint": AnsiSqlType.SMALLINT,
    "smallserial": AnsiSqlType.SMALLINT,
    "int4": AnsiSqlType.INTEGER,
    "int": AnsiSqlType.INTEGER,
    "integer": AnsiSqlType.INTEGER,
    "serial": AnsiSqlType.INTEGER,
    "int8": AnsiSqlType.BIGINT,
    "bigint": AnsiSqlType.BIGINT,
    "bigserial": AnsiSqlType.BIGINT,
    "float4": AnsiSqlType.REAL,
    "real": AnsiSqlType.REAL,
    "float8": AnsiSqlType.DOUBLE,
    "double precision": AnsiSqlType.DOUBLE,
    "float": AnsiSqlType.DOUBLE,
    "numeric": AnsiSqlType.DECIMAL,
    "decimal": AnsiSqlType.DECIMAL,
    "money": AnsiSqlType.DECIMAL,
    "bpchar": AnsiSqlType.CHAR,
    "char": AnsiSqlType.CHAR,
    "character": AnsiSqlType.CHAR,
    "varchar": AnsiSqlType.VARCHAR,
    "character varying": AnsiSqlType.VARCHAR,
    "text": AnsiSqlType.TEXT,
    "bytea": AnsiSqlType.VARBINARY,
    "bool": AnsiSqlType.BOOLEAN,
    "boolean": AnsiSqlType.BOOLEAN,
    "date": AnsiSqlType.DATE,
    "time": AnsiSqlType.TIME,
    "time without time zone": AnsiSqlType.TIME,
    "timetz": AnsiSqlType.TIME,
    "time with time zone": AnsiSqlType.TIME,
    "timestamp": AnsiSqlType.TIMESTAMP,
    "timestamp without time zone": AnsiSqlType.TIMESTAMP,
    "timestamptz": AnsiSqlType.TIMESTAMP,
    "timestamp with time zone": AnsiSqlType.TIMESTAMP,
    "interval": AnsiSqlType.VARCHAR,
    "uuid": AnsiSqlType.VARCHAR,
    "json": AnsiSqlType.TEXT,
    "jsonb": AnsiSqlType.TEXT,
    "xml": AnsiSqlType.TEXT,
    "inet": AnsiSqlType.VARCHAR,
    "cidr": AnsiSqlType.VARCHAR,
    "macaddr": AnsiSqlType.VARCHAR,
    "macaddr8": AnsiSqlType.VARCHAR,
    "bit": AnsiSqlType.VARBINARY,
    "varbit": AnsiSqlType.VARBINARY,
    "bit varying": AnsiSqlType.VARBINARY,
    "tsvector": AnsiSqlType.TEXT,
    "tsquery": AnsiSqlType.TEXT,
}

GEOMETRIC_TYPES = frozenset({"point", "line", "lseg", "box", "path", "polygon", "circle"})
NETWORK_TYPES = frozenset({"inet", "cidr", "macaddr", "macaddr8"})
BIT_TYPES = frozenset({"bit", "varbit", "bit varying"})
TEXT_SEARCH_TYPES = frozenset({"tsvector", "tsquery"})

_MONEY_NOISE = re.compile(r"[^0-9.\-]")


def _money_to_decimal(value: Any) -> Any:
    if isinstance(value, Decimal | int | float):
        return Decimal(str(value))
    text = str(value).strip()
    negative = text.startswith("(") and text.endswith(")")
    try:
        amount = Decimal(_MONEY_NOISE.sub("", text))
    except InvalidOperation:
        return text
    return -amount if negative else amount


class PostgreSQLAdapter(BaseDialectAdapter):
    """PostgreSQL dialect adapter.

    Type names are matched case-insensitively against lower-case names. Values
    of PostgreSQL-specific types without a generic counterpart (json, uuid,
    geometric, network, money, bit strings, text search) are coerced per type.
    """

    quote_string = '"'

    @property
    def name(self) -> str:
        return "postgresql"

    @property
    def sqlglot_dialect(self) -> str:
        return "postgres"

    def apply_time_granularity(self, date_expr: str, granularity: TimeGranularity | str) -> str:
        require_expression(date_expr)
        return f"DATE_TRUNC('{to_granularity(granularity).value}', {date_expr})"

    def to_ansi_sql_type(
        self,
        native_type: str,
        generic_type: GenericType | str | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> AnsiSqlType:
        key = (native_type or "").strip().lower()
        if key in _TYPE_MAPPING:
            return _TYPE_MAPPING[key]
        if key in GEOMETRIC_TYPES:
            return AnsiSqlType.TEXT
        if key.startswith("_"):
            # Array types (_int4, _text, ...) are exposed as their text form
            return AnsiSqlType.TEXT
        return from_generic_type(generic_type)

    def normalize_value(self, native_type: str, value: Any) -> Any:
        if value is None:
            return None

        key = (native_type or "").strip().lower()
        if key in ("json", "jsonb"):
            if isinstance(value, str):
                return value
            return json.dumps(value)
        if key == "money":
            return _money_to_decimal(value)
        if key in BIT_TYPES:
            if isinstance(value, bytes | bytearray):
                return "".join(f"{byte:08b}" for byte in value)
            return str(value)
        if key == "uuid" or key in GEOMETRIC_TYPES or key in NETWORK_TYPES or key in TEXT_SEARCH_TYPES:
            return str(value)
        return value
