"""Dialect adapters and the backend registry."""

from semql.db.base import BaseDialectAdapter
from semql.db.duckdb import DuckDBAdapter
from semql.db.mysql import MySQLAdapter
from semql.db.oracle import OracleAdapter
from semql.db.postgres import PostgreSQLAdapter
from semql.db.types import AnsiSqlType, GenericType
from semql.validation import UnsupportedDialectError

__all__ = [
    "AnsiSqlType",
    "BaseDialectAdapter",
    "DuckDBAdapter",
    "GenericType",
    "MySQLAdapter",
    "OracleAdapter",
    "PostgreSQLAdapter",
    "available_dialects",
    "get_adapter",
    "register_adapter",
]

_ADAPTER_CLASSES: dict[str, type[BaseDialectAdapter]] = {
    "duckdb": DuckDBAdapter,
    "mysql": MySQLAdapter,
    "oracle": OracleAdapter,
    "postgresql": PostgreSQLAdapter,
}

_ALIASES = {
    "postgres": "postgresql",
    "pg": "postgresql",
}

# Adapters are stateless, so one instance per backend is shared
_INSTANCES: dict[str, BaseDialectAdapter] = {}


def register_adapter(name: str, adapter_class: type[BaseDialectAdapter]) -> None:
    """Register a dialect adapter class under a backend name."""
    key = name.lower()
    _ADAPTER_CLASSES[key] = adapter_class
    _INSTANCES.pop(key, None)


def available_dialects() -> list[str]:
    """Names of all registered backends."""
    return sorted(_ADAPTER_CLASSES)


def get_adapter(dialect: "str | BaseDialectAdapter") -> BaseDialectAdapter:
    """Get the shared adapter for a backend.

    Args:
        dialect: Backend name (e.g., 'duckdb', 'postgres') or an adapter instance

    Returns:
        Dialect adapter

    Raises:
        UnsupportedDialectError: If no adapter is registered under the name
    """
    if isinstance(dialect, BaseDialectAdapter):
        return dialect

    key = dialect.lower()
    key = _ALIASES.get(key, key)
    if key not in _ADAPTER_CLASSES:
        raise UnsupportedDialectError(
            f"Unsupported dialect: {dialect}. Available dialects: {', '.join(available_dialects())}"
        )

    adapter = _INSTANCES.get(key)
    if adapter is None:
        adapter = _INSTANCES.setdefault(key, _ADAPTER_CLASSES[key]())
    return adapter
