"""Property schema models — the declarative surface of a worksheet component.

A :class:`ComponentPropertySchema` lists the :class:`PropertyDefinition`
entries a component type exposes.  Composite definitions (``object`` and
``array-object``) nest further definitions through ``object_schema``; the
nesting must form a finite tree.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Literal

from pydantic import Field, model_validator

from errors.exceptions import SchemaDefinitionError
from models.base import CamelModel

# Hard ceiling on composite nesting, checked at construction.
MAX_SCHEMA_DEPTH = 8


class PropertyType(str, Enum):
    """Closed set of property types the editing engine understands."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    COLOR = "color"
    SELECT = "select"
    URL = "url"
    ARRAY_SIMPLE = "array-simple"  # list[str]
    ARRAY_OBJECT = "array-object"  # list[dict], each item shaped by object_schema
    OBJECT = "object"  # dict shaped by object_schema


SCALAR_TYPES = frozenset({
    PropertyType.STRING,
    PropertyType.NUMBER,
    PropertyType.BOOLEAN,
    PropertyType.COLOR,
    PropertyType.SELECT,
    PropertyType.URL,
})

COMPOSITE_TYPES = frozenset({PropertyType.OBJECT, PropertyType.ARRAY_OBJECT})


class SelectOption(CamelModel):
    """One entry of a ``select`` property."""

    value: Any
    label: str


class PropertyDefinition(CamelModel):
    """Describes one configurable field of a component."""

    key: str
    label: str
    type: PropertyType
    description: str | None = None
    required: bool = False
    default: Any = None
    min: float | None = None
    max: float | None = None
    options: list[SelectOption] | None = None
    object_schema: list[PropertyDefinition] | None = None
    placeholder: str | None = None
    helper_text: str | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> PropertyDefinition:
        if self.options is not None and self.type != PropertyType.SELECT:
            raise SchemaDefinitionError(self.key, "options are only allowed on select properties")
        if self.type == PropertyType.SELECT and not self.options:
            raise SchemaDefinitionError(self.key, "select properties need at least one option")
        if self.type in COMPOSITE_TYPES:
            if not self.object_schema:
                raise SchemaDefinitionError(
                    self.key, f"{self.type.value} properties need an object_schema"
                )
            _ensure_unique_keys(self.key, self.object_schema)
        elif self.object_schema is not None:
            raise SchemaDefinitionError(
                self.key, "object_schema is only allowed on object / array-object properties"
            )
        if (self.min is not None or self.max is not None) and self.type != PropertyType.NUMBER:
            raise SchemaDefinitionError(self.key, "min/max are only meaningful on number properties")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise SchemaDefinitionError(self.key, f"min {self.min} exceeds max {self.max}")
        if self.type == PropertyType.NUMBER and self.default is not None:
            self._check_number_default()
        return self

    def _check_number_default(self) -> None:
        default = self.default
        if isinstance(default, bool) or not isinstance(default, (int, float)):
            raise SchemaDefinitionError(self.key, f"default {default!r} is not a number")
        if isinstance(default, float) and not math.isfinite(default):
            raise SchemaDefinitionError(self.key, f"default {default!r} is not finite")
        if self.min is not None and default < self.min:
            raise SchemaDefinitionError(self.key, f"default {default} is below min {self.min}")
        if self.max is not None and default > self.max:
            raise SchemaDefinitionError(self.key, f"default {default} is above max {self.max}")

    @property
    def is_composite(self) -> bool:
        return self.type in COMPOSITE_TYPES

    def option_values(self) -> list[Any]:
        return [opt.value for opt in self.options or []]

    def nested(self, key: str) -> PropertyDefinition | None:
        """Return the nested definition named *key*, if any."""
        for child in self.object_schema or []:
            if child.key == key:
                return child
        return None


class ComponentPropertySchema(CamelModel):
    """All editable properties of one component type, in display order."""

    component_type: str
    component_name: str
    category: Literal["interactive"] = "interactive"
    icon: str = ""
    properties: list[PropertyDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_tree(self) -> ComponentPropertySchema:
        _ensure_unique_keys(self.component_type, self.properties)
        for definition in self.properties:
            _ensure_finite(definition, ancestors=(), depth=1)
        return self

    def get(self, key: str) -> PropertyDefinition | None:
        """Return the top-level definition for *key*, if declared."""
        for definition in self.properties:
            if definition.key == key:
                return definition
        return None

    def keys(self) -> list[str]:
        return [definition.key for definition in self.properties]


def _ensure_unique_keys(owner: str, definitions: list[PropertyDefinition]) -> None:
    seen: set[str] = set()
    for definition in definitions:
        if definition.key in seen:
            raise SchemaDefinitionError(owner, f"duplicate property key '{definition.key}'")
        seen.add(definition.key)


def _ensure_finite(
    definition: PropertyDefinition,
    ancestors: tuple[int, ...],
    depth: int,
) -> None:
    """Reject definitions that reappear on their own ancestor chain."""
    if id(definition) in ancestors:
        raise SchemaDefinitionError(definition.key, "schema references itself")
    if depth > MAX_SCHEMA_DEPTH:
        raise SchemaDefinitionError(
            definition.key, f"nesting deeper than {MAX_SCHEMA_DEPTH} levels"
        )
    chain = (*ancestors, id(definition))
    for child in definition.object_schema or []:
        _ensure_finite(child, chain, depth + 1)
