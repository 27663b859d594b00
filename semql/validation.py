"""Errors and validation rules for semantic models and compilation."""

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from semql.core.model import SemanticModel

_TRAILING_TERMINATOR = re.compile(r";\s*$")


class SemqlError(Exception):
    """Base class for all semql errors."""

    pass


class SqlSyntaxError(SemqlError):
    """Raised when SQL cannot be parsed in the authoring or destination grammar."""

    def __init__(self, message: str, sql: str | None = None):
        super().__init__(message)
        self.sql = sql


class UnsupportedQueryShapeError(SemqlError):
    """Raised when the top-level statement is not a SELECT, ORDER BY or WITH query."""

    def __init__(self, shape: str):
        super().__init__(f"Unsupported SQL statement: {shape}. Only SELECT, ORDER BY and WITH queries are supported")
        self.shape = shape


class NoMatchingModelError(SemqlError):
    """Raised when no referenced table matches a registered semantic model."""

    def __init__(self, candidates: set[str] | None = None):
        candidates = set(candidates or ())
        listed = ", ".join(sorted(candidates)) if candidates else "none"
        super().__init__(f"No matching semantic model was found (referenced tables: {listed})")
        self.candidates = candidates


class ModelRenderError(SemqlError):
    """Raised when the backing SQL of a semantic model cannot be parsed or rendered."""

    def __init__(self, model_name: str, reason: str):
        super().__init__(f"Failed to render semantic model '{model_name}': {reason}")
        self.model_name = model_name


class ModelValidationError(SemqlError):
    """Raised when semantic models cannot be registered."""

    def __init__(self, message: str, model_name: str | None = None):
        super().__init__(message)
        self.model_name = model_name


class DuplicateModelNameError(ModelValidationError):
    """Raised when two semantic models share a name."""

    def __init__(self, model_name: str):
        super().__init__(f"Semantic model '{model_name}' is defined more than once", model_name)


class InvalidModelDefinitionError(ModelValidationError):
    """Raised when a semantic model definition violates a model invariant."""

    def __init__(self, model_name: str | None, errors: list[str]):
        label = f"'{model_name}'" if model_name else "<unnamed>"
        super().__init__(
            f"Semantic model {label} validation failed:\n" + "\n".join(f"  - {e}" for e in errors),
            model_name,
        )
        self.errors = errors


class InvalidArgumentError(SemqlError, ValueError):
    """Raised when a dialect adapter receives an invalid argument."""

    pass


class UnsupportedDialectError(SemqlError, ValueError):
    """Raised when no dialect adapter is registered under a name."""

    pass


def _model_label(model: "SemanticModel") -> str:
    return f"the semantic model '{model.name}'" if model.name.strip() else "the semantic model"


def validate_model_sql(model: "SemanticModel") -> list[str]:
    """Validate the backing SELECT of a semantic model.

    Args:
        model: Semantic model to check

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    sql = model.model.strip()

    if not sql.upper().startswith("SELECT"):
        errors.append(f"The model of {_model_label(model)} must be a SELECT statement")

    if _TRAILING_TERMINATOR.search(sql):
        errors.append(
            f"The model of {_model_label(model)} is and can only be a SELECT statement "
            "(the end of the statement cannot contain ';')"
        )

    return errors


def validate_semantic_model(model: "SemanticModel") -> list[str]:
    """Validate a semantic model definition.

    Args:
        model: Semantic model to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = validate_model_sql(model)

    primary_keys = [e.name for e in model.entities if e.type == "primary"]
    if len(primary_keys) > 1:
        errors.append(
            f"There can be at most one primary entity in {_model_label(model)}, found: {', '.join(primary_keys)}"
        )

    names = set()
    for kind, elements in (
        ("entity", model.entities),
        ("dimension", model.dimensions),
        ("measure", model.measures),
    ):
        for element in elements:
            if element.name in names:
                errors.append(f"There is duplicate name in {_model_label(model)}: {kind} '{element.name}'")
            names.add(element.name)

    agg_time_dimension = model.defaults.agg_time_dimension
    if agg_time_dimension and agg_time_dimension.strip():
        dimension = model.get_dimension(agg_time_dimension)
        if dimension is None or dimension.type != "time":
            errors.append(
                f"The '{agg_time_dimension}' of the agg_time_dimension of defaults does not exist "
                f"or type is not time in the dimensions of {_model_label(model)}"
            )

    time_with_enums = [f"'{d.name}'" for d in model.dimensions if d.type == "time" and d.enum_values]
    if time_with_enums:
        errors.append(
            f"The time type {', '.join(time_with_enums)} cannot set enum values "
            f"in the dimensions of {_model_label(model)}"
        )

    return errors
