"""Shared base for semantic model definitions."""

from pydantic import BaseModel, ConfigDict, ValidationError


class DefinitionModel(BaseModel):
    """Base for declarative definitions.

    Assignments are validated like construction. A rejected assignment leaves
    the previous value in place.
    """

    model_config = ConfigDict(validate_assignment=True, use_enum_values=False)

    def __setattr__(self, name, value):
        if name not in type(self).model_fields:
            super().__setattr__(name, value)
            return

        previous = self.__dict__.get(name)
        try:
            super().__setattr__(name, value)
        except ValidationError:
            self.__dict__[name] = previous
            raise


class ElementModel(DefinitionModel):
    """Base for the entities, dimensions and measures of a semantic model.

    Elements are frozen: a semantic model checks invariants across all of its
    elements, so an element is changed by assigning a new element list to
    the model.
    """

    model_config = ConfigDict(frozen=True)
