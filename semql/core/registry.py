"""Registry of semantic models, keyed by name."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from semql.core.model import SemanticModel
from semql.validation import DuplicateModelNameError, InvalidModelDefinitionError

logger = logging.getLogger(__name__)


def _validation_messages(error: ValidationError) -> list[str]:
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        message = detail.get("msg", "")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages.append(f"{location}: {message}" if location else message)
    return messages


class SemanticModelRegistry:
    """Validated, immutable index of semantic models.

    Built once with :meth:`build` and then shared read-only; lookups never
    mutate the registry.
    """

    def __init__(self, models: dict[str, SemanticModel]):
        self._models = dict(models)

    @classmethod
    def build(cls, models: Iterable[SemanticModel | Mapping[str, Any]]) -> "SemanticModelRegistry":
        """Validate and index semantic models.

        Args:
            models: Semantic models or declarative definitions (e.g. parsed YAML)

        Returns:
            Registry containing every model in the given order

        Raises:
            DuplicateModelNameError: If two models share a name
            InvalidModelDefinitionError: If a model violates a model invariant
        """
        indexed: dict[str, SemanticModel] = {}
        for definition in models:
            model = cls.validate_definition(definition)
            if model.name in indexed:
                raise DuplicateModelNameError(model.name)
            indexed[model.name] = model

        logger.debug("Registered %d semantic models: %s", len(indexed), ", ".join(indexed))
        return cls(indexed)

    @staticmethod
    def validate_definition(definition: SemanticModel | Mapping[str, Any]) -> SemanticModel:
        """Validate one model or declarative definition.

        Raises:
            InvalidModelDefinitionError: If the definition violates a model invariant
        """
        if isinstance(definition, SemanticModel):
            data = definition.model_dump()
            name = definition.name
        else:
            data = dict(definition)
            name = data.get("name")

        try:
            model = SemanticModel.model_validate(data)
        except ValidationError as e:
            raise InvalidModelDefinitionError(name, _validation_messages(e)) from e

        return definition if isinstance(definition, SemanticModel) else model

    def resolve(self, candidate_names: Iterable[str]) -> set[SemanticModel]:
        """Look up the models named by the candidates.

        Unknown candidates are dropped.
        """
        return {self._models[name] for name in candidate_names if name in self._models}

    def resolve_ordered(self, candidate_names: Iterable[str]) -> list[SemanticModel]:
        """Like :meth:`resolve`, ordered by registration."""
        wanted = set(candidate_names)
        return [model for name, model in self._models.items() if name in wanted]

    def get(self, name: str) -> SemanticModel | None:
        return self._models.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._models)

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator[SemanticModel]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self) -> str:
        return f"SemanticModelRegistry({', '.join(self._models)})"
