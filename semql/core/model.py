"""Semantic model definitions."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from semql.core.base import DefinitionModel
from semql.core.dimension import Dimension
from semql.core.entity import Entity
from semql.core.measure import Measure


class Defaults(BaseModel):
    """Model-level defaults."""

    model_config = ConfigDict(frozen=True)

    agg_time_dimension: str | None = Field(None, description="Default time dimension for aggregations")


class SemanticModel(DefinitionModel):
    """Semantic model (business-level dataset) definition.

    A semantic model is a named view over a SQL SELECT statement, described by
    its entities, dimensions and measures. Its name is the virtual table name
    used in semantic SQL.
    """

    name: str = Field(..., description="Unique model name, also the virtual table name")
    description: str = Field(default="", description="Human-readable description")
    alias: str | None = Field(None, description="Alternative business name")
    model: str = Field(..., description="SELECT statement defining the backing rows")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    defaults: Defaults = Field(default_factory=Defaults, description="Model-level defaults")

    entities: list[Entity] = Field(default_factory=list, description="Entity definitions")
    dimensions: list[Dimension] = Field(default_factory=list, description="Dimension definitions")
    measures: list[Measure] = Field(default_factory=list, description="Measure definitions")

    @model_validator(mode="after")
    def check_invariants(self) -> "SemanticModel":
        from semql.validation import validate_semantic_model

        errors = validate_semantic_model(self)
        if errors:
            raise ValueError("; ".join(errors))
        return self

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def primary_entity(self) -> Entity | None:
        """Get the primary entity, if any."""
        for entity in self.entities:
            if entity.type == "primary":
                return entity
        return None

    @property
    def has_elements(self) -> bool:
        return bool(self.entities or self.dimensions or self.measures)

    def get_entity(self, name: str) -> Entity | None:
        """Get entity by name."""
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    def get_dimension(self, name: str) -> Dimension | None:
        """Get dimension by name."""
        for dimension in self.dimensions:
            if dimension.name == name:
                return dimension
        return None

    def get_measure(self, name: str) -> Measure | None:
        """Get measure by name."""
        for measure in self.measures:
            if measure.name == name:
                return measure
        return None
