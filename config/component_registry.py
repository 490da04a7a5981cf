"""Component Registry — maps a component type to its property schema.

Built once at import from ``PROPERTY_SCHEMA_TABLE`` and read-only
thereafter.  Unknown component types resolve to ``None``: the component has
no editable properties yet, which is a permanent state, not an error.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from config.property_schemas import PROPERTY_SCHEMA_TABLE
from errors.exceptions import SchemaDefinitionError
from models.property_schema import ComponentPropertySchema, PropertyDefinition

logger = logging.getLogger(__name__)


def _build_registry(table: list[dict]) -> Mapping[str, ComponentPropertySchema]:
    registry: dict[str, ComponentPropertySchema] = {}
    for entry in table:
        schema = ComponentPropertySchema.model_validate(entry)
        if schema.component_type in registry:
            raise SchemaDefinitionError(schema.component_type, "component type registered twice")
        registry[schema.component_type] = schema
    logger.debug("Property schema registry built (%d component types)", len(registry))
    return MappingProxyType(registry)


COMPONENT_REGISTRY: Mapping[str, ComponentPropertySchema] = _build_registry(PROPERTY_SCHEMA_TABLE)


def get_schema(component_type: str) -> ComponentPropertySchema | None:
    """Return the property schema for *component_type*, or ``None`` if unknown."""
    return COMPONENT_REGISTRY.get(component_type)


def is_editable(component_type: str) -> bool:
    """True when *component_type* exposes editable properties."""
    return get_schema(component_type) is not None


def list_component_types() -> list[str]:
    """Registered component types, in table order."""
    return list(COMPONENT_REGISTRY.keys())


def _describe_definition(definition: PropertyDefinition, indent: str) -> list[str]:
    required = "(required)" if definition.required else "(optional)"
    line = f"{indent}- `{definition.key}` [{definition.type.value}] {required}: {definition.label}"
    if definition.default is not None:
        line += f" [default: {definition.default!r}]"
    if definition.min is not None or definition.max is not None:
        line += f" [range: {definition.min if definition.min is not None else '-'}"
        line += f"..{definition.max if definition.max is not None else '-'}]"
    lines = [line]
    if definition.options:
        allowed = ", ".join(repr(opt.value) for opt in definition.options)
        lines.append(f"{indent}  Allowed values: {allowed}")
    for child in definition.object_schema or []:
        lines.extend(_describe_definition(child, indent + "  "))
    return lines


def get_registry_description(component_type: str | None = None) -> str:
    """Return a formatted description of one or all registered schemas.

    Intended for injection into the LLM edit prompt.
    """
    if component_type is not None:
        schema = get_schema(component_type)
        schemas = [schema] if schema else []
    else:
        schemas = list(COMPONENT_REGISTRY.values())

    lines: list[str] = ["## Editable Component Properties\n"]
    for schema in schemas:
        lines.append(f"### `{schema.component_type}` — {schema.component_name}")
        for definition in schema.properties:
            lines.extend(_describe_definition(definition, "  "))
        lines.append("")
    return "\n".join(lines)
