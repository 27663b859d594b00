"""Base dialect adapter interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from semql.core.dimension import TimeGranularity
from semql.db.types import AnsiSqlType, GenericType, from_generic_type
from semql.validation import InvalidArgumentError


def require_expression(date_expr: str | None) -> str:
    """Validate a date expression passed to a time granularity function.

    Raises:
        InvalidArgumentError: If the expression is None or blank
    """
    if date_expr is None or not date_expr.strip():
        raise InvalidArgumentError("Date expression cannot be null or empty")
    return date_expr


def to_granularity(granularity: TimeGranularity | str) -> TimeGranularity:
    if isinstance(granularity, TimeGranularity):
        return granularity
    try:
        return TimeGranularity(granularity.lower())
    except (AttributeError, ValueError):
        raise InvalidArgumentError(f"Unsupported time granularity: {granularity!r}")


class BaseDialectAdapter(ABC):
    """Abstract base class for dialect adapters.

    An adapter bundles the per-database rules the compiler needs: identifier
    quoting, row limiting, time truncation, operator overrides and type
    normalization. Adapters are stateless and safe to share between threads.
    """

    #: Quote character for identifiers ("" leaves identifiers unquoted)
    quote_string: str = '"'

    #: Native type name (upper-case) -> normalized type
    type_mapping: dict[str, AnsiSqlType] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name of the backend (e.g., 'duckdb', 'postgresql')."""
        raise NotImplementedError

    @property
    @abstractmethod
    def sqlglot_dialect(self) -> str:
        """Get SQLGlot dialect name used for parsing and rendering."""
        raise NotImplementedError

    @abstractmethod
    def apply_time_granularity(self, date_expr: str, granularity: TimeGranularity | str) -> str:
        """Truncate a date expression to a time granularity.

        Args:
            date_expr: SQL date/timestamp expression
            granularity: Target granularity

        Returns:
            SQL expression with the granularity applied

        Raises:
            InvalidArgumentError: If the expression is blank
        """
        raise NotImplementedError

    @property
    def identify(self) -> bool:
        """Whether rendered SQL quotes every identifier."""
        return bool(self.quote_string)

    def quote_identifier(self, identifier: str) -> str:
        """Quote a table or column name."""
        if not self.quote_string:
            return identifier
        escaped = identifier.replace(self.quote_string, self.quote_string * 2)
        return f"{self.quote_string}{escaped}{self.quote_string}"

    def limit_clause(self, limit: int) -> str:
        """Get the row-limiting clause for this backend."""
        if limit < 0:
            raise InvalidArgumentError(f"Limit must be non-negative, got {limit}")
        return f"LIMIT {limit}"

    @property
    def operator_overrides(self) -> dict[type, Callable[..., str]]:
        """Expression renderers that replace the SQLGlot defaults for this backend."""
        from semql.sql.operators import overrides_for

        return overrides_for(self.name)

    def to_ansi_sql_type(
        self,
        native_type: str,
        generic_type: GenericType | str | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> AnsiSqlType:
        """Map a native column type to a normalized ANSI type.

        Args:
            native_type: Type name reported by the database (e.g., 'VARCHAR2')
            generic_type: Driver-neutral type code, used when the native name is unknown
            precision: Column precision, if known
            scale: Column scale, if known

        Returns:
            Normalized type (UNKNOWN when nothing matches)
        """
        key = (native_type or "").strip().upper()
        mapped = self.type_mapping.get(key)
        if mapped is not None:
            return mapped
        return from_generic_type(generic_type)

    def normalize_value(self, native_type: str, value: Any) -> Any:
        """Coerce a fetched value of the given native type to a plain Python value."""
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
