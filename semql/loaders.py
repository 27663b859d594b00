"""Loading semantic models from YAML schema files."""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from semql.core.model import SemanticModel
from semql.core.registry import SemanticModelRegistry
from semql.validation import InvalidModelDefinitionError

logger = logging.getLogger(__name__)

_MODEL_REF = re.compile(r"""^\s*ref\(\s*['"]([^'"]+)['"]\s*\)\s*$""")
_NAME_PART = r"[a-zA-Z_][a-zA-Z0-9_]*"
_TABLE_NAME = re.compile(rf"^{_NAME_PART}(\.{_NAME_PART})?$")
_SELECT = re.compile(r"^\s*select\b", re.IGNORECASE)
_LINE_COMMENT = re.compile(r"--.*")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_TRAILING_TERMINATOR = re.compile(r";\s*$")

SCHEMA_SUFFIXES = (".yaml", ".yml")


def strip_sql_comments(sql: str) -> str:
    return _BLOCK_COMMENT.sub("", _LINE_COMMENT.sub("", sql))


def clean_model_sql(sql: str) -> str:
    """Remove comments and the trailing ';' from a model SELECT."""
    return _TRAILING_TERMINATOR.sub("", strip_sql_comments(sql).strip()).strip()


def resolve_model_sql(name: str, model: str, sql_models: Mapping[str, str]) -> str:
    """Turn the ``model`` value of a schema entry into a SELECT statement.

    The value may be ``ref('<sql model>')``, a SELECT statement, or a plain
    or schema-qualified table name.

    Args:
        name: Semantic model name (for error messages)
        model: Raw ``model`` value
        sql_models: SQL model files keyed by name

    Returns:
        SELECT statement

    Raises:
        InvalidModelDefinitionError: If the value is none of the above or
            references an unknown SQL model
    """
    ref = _MODEL_REF.match(model)
    if ref:
        ref_name = ref.group(1)
        if ref_name not in sql_models:
            raise InvalidModelDefinitionError(
                name, [f"There are non-existent model '{ref_name}' in the semantic model '{name}'"]
            )
        return clean_model_sql(sql_models[ref_name])

    if _SELECT.match(strip_sql_comments(model).strip()):
        return clean_model_sql(model)

    if _TABLE_NAME.match(model.strip()):
        return f"SELECT * FROM {model.strip()}"

    raise InvalidModelDefinitionError(
        name, [f"The model value of the semantic model '{name}' is incorrect. model: {model}"]
    )


def load_schema(schema: str | Mapping[str, Any], sql_models: Mapping[str, str] | None = None) -> list[SemanticModel]:
    """Load semantic models from a schema document.

    Example YAML:
        version: 1
        semantic_models:
          - name: orders
            description: Customer orders
            model: ref('stg_orders')
            dimensions:
              - name: order_date
                type: time
                type_params:
                  time_granularity: day

    Args:
        schema: YAML text or an already parsed mapping
        sql_models: SQL model files keyed by name, for ``ref()``

    Returns:
        Validated semantic models

    Raises:
        InvalidModelDefinitionError: If a semantic model is invalid
        ValueError: If the document is not a schema
    """
    data = yaml.safe_load(schema) if isinstance(schema, str) else schema
    if data is None:
        return []
    if not isinstance(data, Mapping):
        raise ValueError("Schema must be a mapping with a 'semantic_models' list")

    definitions = data.get("semantic_models") or []
    if not isinstance(definitions, list):
        raise ValueError("'semantic_models' must be a list")

    sql_models = sql_models or {}
    models = []
    for definition in definitions:
        definition = dict(definition)
        name = definition.get("name", "")
        if isinstance(definition.get("model"), str):
            definition["model"] = resolve_model_sql(name, definition["model"], sql_models)
        models.append(SemanticModelRegistry.validate_definition(definition))
    return models


def load_sql_models(directory: str | Path) -> dict[str, str]:
    """Read ``*.sql`` files below a directory, keyed by file stem."""
    directory = Path(directory)
    if not directory.exists():
        raise ValueError(f"Directory {directory} does not exist")

    return {path.stem: path.read_text() for path in sorted(directory.rglob("*.sql"))}


def load_from_directory(directory: str | Path, models_dir: str | Path | None = None) -> SemanticModelRegistry:
    """Load every schema file below a directory into a registry.

    Files that are not valid YAML are skipped with a warning; invalid
    semantic models are errors.

    Args:
        directory: Directory containing ``*.yaml``/``*.yml`` schema files
        models_dir: Directory containing SQL model files for ``ref()``

    Returns:
        Registry with all semantic models
    """
    directory = Path(directory)
    if not directory.exists():
        raise ValueError(f"Directory {directory} does not exist")

    sql_models = load_sql_models(models_dir) if models_dir else {}

    models: list[SemanticModel] = []
    for file_path in sorted(directory.rglob("*")):
        if not file_path.is_file() or file_path.suffix.lower() not in SCHEMA_SUFFIXES:
            continue

        try:
            data = yaml.safe_load(file_path.read_text())
        except yaml.YAMLError as e:
            logger.warning("Could not parse %s: %s", file_path, e)
            continue

        if not isinstance(data, Mapping) or "semantic_models" not in data:
            continue

        models.extend(load_schema(data, sql_models))
        logger.debug("Loaded %s", file_path)

    return SemanticModelRegistry.build(models)
