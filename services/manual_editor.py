"""Manual edit engine — field-by-field edits driven by a property schema.

Walks a :class:`ComponentPropertySchema` and a property bag together and
produces individual field edits:

- scalars (string / url / color / select / boolean / number) are replaced
  wholesale after validation; numbers outside ``[min, max]`` are rejected,
  never clamped
- ``array-simple`` supports append / update / remove by index
- ``array-object`` supports append (nested defaults) / update one field of
  one item / remove by index; order is display order
- ``object`` merges one field at a time into the existing sub-object
- dotted paths (``pairs.0.cause.text``) recurse through composites

Every operation returns a :class:`FieldEditResult`; nothing raises out of
the engine.  The input bag is never mutated.
"""

from __future__ import annotations

import copy
import logging
import math
import sys
from dataclasses import dataclass, field
from typing import Any, Callable

from models.errors import EditErrorCode
from models.property_schema import (
    ComponentPropertySchema,
    PropertyDefinition,
    PropertyType,
    SCALAR_TYPES,
)

logger = logging.getLogger(__name__)


@dataclass
class FieldEditResult:
    """Outcome of one manual edit step.

    ``value`` is the new value stored under ``key``; ``properties`` is the
    full updated bag.  Rejected edits carry ``error`` + ``code`` and leave
    ``properties`` equal to the input bag.
    """

    ok: bool
    key: str
    value: Any = None
    properties: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    code: EditErrorCode | None = None

    @property
    def patch(self) -> dict[str, Any]:
        """The single-key patch to merge into a live bag (empty when rejected)."""
        return {self.key: self.value} if self.ok else {}


@dataclass
class PropertyIssue:
    """A problem found by :meth:`ManualEditEngine.validate`."""

    path: str
    code: EditErrorCode
    message: str


# ── Value helpers ────────────────────────────────────────────


def current_value(definition: PropertyDefinition, properties: dict[str, Any]) -> Any:
    """``properties[key]`` when present, else the definition's default."""
    value = properties.get(definition.key)
    return definition.default if value is None else value


def renderable_fields(
    schema: ComponentPropertySchema | None,
    properties: dict[str, Any],
) -> list[tuple[PropertyDefinition, Any]]:
    """Ordered ``(definition, current value)`` pairs for the rendering layer.

    A ``None`` schema (unknown component type) renders nothing.
    """
    if schema is None:
        return []
    return [(definition, current_value(definition, properties)) for definition in schema.properties]


def default_item(definition: PropertyDefinition) -> dict[str, Any]:
    """A fresh ``array-object`` item with every nested field at its default."""
    item: dict[str, Any] = {}
    for child in definition.object_schema or []:
        item[child.key] = copy.deepcopy(child.default) if child.default is not None else ""
    return item


def _coerce_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if abs(value) <= sys.float_info.max else None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


# ── Per-type validators ──────────────────────────────────────
# Each returns (normalized_value, None) or (None, (code, message)).

_Check = tuple[Any, "tuple[EditErrorCode, str] | None"]


def _check_text(definition: PropertyDefinition, value: Any) -> _Check:
    if not isinstance(value, str):
        return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}' expects text")
    return value, None


def _check_boolean(definition: PropertyDefinition, value: Any) -> _Check:
    if not isinstance(value, bool):
        return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}' expects true/false")
    return value, None


def _check_number(definition: PropertyDefinition, value: Any) -> _Check:
    number = _coerce_number(value)
    if number is None:
        return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}' expects a number")
    if definition.min is not None and number < definition.min:
        return None, (
            EditErrorCode.OUT_OF_RANGE,
            f"'{definition.key}' must be at least {definition.min:g} (got {number:g})",
        )
    if definition.max is not None and number > definition.max:
        return None, (
            EditErrorCode.OUT_OF_RANGE,
            f"'{definition.key}' must be at most {definition.max:g} (got {number:g})",
        )
    return number, None


def _check_select(definition: PropertyDefinition, value: Any) -> _Check:
    allowed = definition.option_values()
    for option in allowed:
        if option == value and type(option) is type(value):
            return value, None
    return None, (
        EditErrorCode.VALIDATION_ERROR,
        f"'{definition.key}' must be one of {allowed!r} (got {value!r})",
    )


def _check_array_simple(definition: PropertyDefinition, value: Any) -> _Check:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}' expects a list of text items")
    return list(value), None


def _check_object(definition: PropertyDefinition, value: Any) -> _Check:
    if not isinstance(value, dict):
        return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}' expects an object")
    for key, child_value in value.items():
        child = definition.nested(key)
        if child is None or child_value is None:
            continue
        _, problem = check_value(child, child_value)
        if problem:
            return None, problem
    return dict(value), None


def _check_array_object(definition: PropertyDefinition, value: Any) -> _Check:
    if not isinstance(value, list):
        return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}' expects a list of objects")
    items: list[dict[str, Any]] = []
    for item in value:
        checked, problem = _check_object(definition, item)
        if problem:
            return None, problem
        items.append(checked)
    return items, None


_VALIDATORS: dict[PropertyType, Callable[[PropertyDefinition, Any], _Check]] = {
    PropertyType.STRING: _check_text,
    PropertyType.URL: _check_text,
    PropertyType.COLOR: _check_text,
    PropertyType.BOOLEAN: _check_boolean,
    PropertyType.NUMBER: _check_number,
    PropertyType.SELECT: _check_select,
    PropertyType.ARRAY_SIMPLE: _check_array_simple,
    PropertyType.ARRAY_OBJECT: _check_array_object,
    PropertyType.OBJECT: _check_object,
}

_SCALARS = SCALAR_TYPES


def check_value(definition: PropertyDefinition, value: Any) -> _Check:
    """Validate *value* against *definition*; unknown types are unsupported."""
    validator = _VALIDATORS.get(definition.type)
    if validator is None:
        return None, (
            EditErrorCode.UNSUPPORTED_TYPE,
            f"Unsupported property type '{getattr(definition.type, 'value', definition.type)}' "
            f"for '{definition.key}'",
        )
    return validator(definition, value)


# ── Engine ───────────────────────────────────────────────────


class ManualEditEngine:
    """Applies manual edits to a property bag according to a schema.

    Usage::

        engine = ManualEditEngine(get_schema("tap-image"))
        result = engine.set_value(element.properties, "size", "large")
        if result.ok:
            element.properties = result.properties
    """

    def __init__(self, schema: ComponentPropertySchema) -> None:
        self.schema = schema

    # -- rendering -----------------------------------------------------------

    def fields(self, properties: dict[str, Any]) -> list[tuple[PropertyDefinition, Any]]:
        return renderable_fields(self.schema, properties)

    def build_defaults(self) -> dict[str, Any]:
        """A fresh bag holding every declared default."""
        return {
            definition.key: copy.deepcopy(definition.default)
            for definition in self.schema.properties
            if definition.default is not None
        }

    # -- scalars -------------------------------------------------------------

    def set_value(self, properties: dict[str, Any], key: str, value: Any) -> FieldEditResult:
        """Replace a scalar property wholesale."""
        definition, rejected = self._lookup(properties, key)
        if rejected:
            return rejected
        if definition.type in _VALIDATORS and definition.type not in _SCALARS:
            return self._reject(
                properties,
                key,
                EditErrorCode.VALIDATION_ERROR,
                f"'{key}' is a {definition.type.value} property; edit it item by item",
            )
        checked, problem = check_value(definition, value)
        if problem:
            return self._reject(properties, key, *problem)
        return self._accept(properties, key, checked)

    # -- array-simple --------------------------------------------------------

    def append_item(self, properties: dict[str, Any], key: str) -> FieldEditResult:
        """Append an empty text item."""
        definition, items, rejected = self._items(properties, key, PropertyType.ARRAY_SIMPLE)
        if rejected:
            return rejected
        return self._accept(properties, key, [*items, ""])

    def update_item(self, properties: dict[str, Any], key: str, index: int, text: Any) -> FieldEditResult:
        definition, items, rejected = self._items(properties, key, PropertyType.ARRAY_SIMPLE)
        if rejected:
            return rejected
        if not isinstance(text, str):
            return self._reject(properties, key, EditErrorCode.VALIDATION_ERROR, f"'{key}' items must be text")
        if not 0 <= index < len(items):
            return self._bad_index(properties, key, index, len(items))
        updated = list(items)
        updated[index] = text
        return self._accept(properties, key, updated)

    def remove_item(self, properties: dict[str, Any], key: str, index: int) -> FieldEditResult:
        """Remove by index; later items shift down."""
        definition, items, rejected = self._items(properties, key, PropertyType.ARRAY_SIMPLE)
        if rejected:
            return rejected
        if not 0 <= index < len(items):
            return self._bad_index(properties, key, index, len(items))
        return self._accept(properties, key, [item for i, item in enumerate(items) if i != index])

    # -- array-object --------------------------------------------------------

    def append_object_item(self, properties: dict[str, Any], key: str) -> FieldEditResult:
        """Append a new item initialised from the nested defaults."""
        definition, items, rejected = self._items(properties, key, PropertyType.ARRAY_OBJECT)
        if rejected:
            return rejected
        return self._accept(properties, key, [*_copy_items(items), default_item(definition)])

    def update_object_item(
        self,
        properties: dict[str, Any],
        key: str,
        index: int,
        field_key: str,
        value: Any,
    ) -> FieldEditResult:
        """Set one field of one item; other items and fields are untouched."""
        definition, items, rejected = self._items(properties, key, PropertyType.ARRAY_OBJECT)
        if rejected:
            return rejected
        if not 0 <= index < len(items):
            return self._bad_index(properties, key, index, len(items))
        child = definition.nested(field_key)
        if child is None:
            return self._reject(
                properties, key, EditErrorCode.UNKNOWN_FIELD, f"'{key}' items have no field '{field_key}'"
            )
        checked, problem = check_value(child, value)
        if problem:
            return self._reject(properties, key, *problem)
        updated = _copy_items(items)
        updated[index] = {**updated[index], field_key: checked}
        return self._accept(properties, key, updated)

    def remove_object_item(self, properties: dict[str, Any], key: str, index: int) -> FieldEditResult:
        definition, items, rejected = self._items(properties, key, PropertyType.ARRAY_OBJECT)
        if rejected:
            return rejected
        if not 0 <= index < len(items):
            return self._bad_index(properties, key, index, len(items))
        return self._accept(properties, key, [item for i, item in enumerate(_copy_items(items)) if i != index])

    # -- object --------------------------------------------------------------

    def update_object_field(
        self,
        properties: dict[str, Any],
        key: str,
        field_key: str,
        value: Any,
    ) -> FieldEditResult:
        """Merge one field into the existing sub-object."""
        definition, rejected = self._lookup(properties, key)
        if rejected:
            return rejected
        if definition.type != PropertyType.OBJECT:
            return self._wrong_kind(properties, definition, PropertyType.OBJECT)
        child = definition.nested(field_key)
        if child is None:
            return self._reject(properties, key, EditErrorCode.UNKNOWN_FIELD, f"'{key}' has no field '{field_key}'")
        checked, problem = check_value(child, value)
        if problem:
            return self._reject(properties, key, *problem)
        existing = current_value(definition, properties)
        base = dict(existing) if isinstance(existing, dict) else {}
        base[field_key] = checked
        return self._accept(properties, key, base)

    # -- nested paths --------------------------------------------------------

    def update_nested(self, properties: dict[str, Any], path: str, value: Any) -> FieldEditResult:
        """Set a value addressed by a dotted path, e.g. ``pairs.0.cause.text``.

        Array segments are integer indices; object segments are nested keys.
        The top-level key is rewritten with a copy of the updated structure.
        """
        segments = [segment for segment in path.split(".") if segment]
        if not segments:
            return self._reject(properties, path, EditErrorCode.UNKNOWN_FIELD, "empty property path")
        key, rest = segments[0], segments[1:]
        definition, rejected = self._lookup(properties, key)
        if rejected:
            return rejected
        if not rest:
            if definition.type == PropertyType.OBJECT or definition.type == PropertyType.ARRAY_OBJECT:
                return self._reject(
                    properties,
                    key,
                    EditErrorCode.VALIDATION_ERROR,
                    f"'{key}' is a {definition.type.value} property; address a nested field",
                )
            return self.set_value(properties, key, value)
        new_value, problem = _set_in(definition, copy.deepcopy(current_value(definition, properties)), rest, value)
        if problem:
            return self._reject(properties, key, *problem)
        return self._accept(properties, key, new_value)

    # -- whole-bag validation ------------------------------------------------

    def validate_properties(self, properties: dict[str, Any]) -> list[PropertyIssue]:
        """Report every required-missing, mistyped or out-of-range value."""
        issues: list[PropertyIssue] = []
        for definition in self.schema.properties:
            _collect_issues(definition, properties.get(definition.key), definition.key, issues)
        return issues

    # -- internals -----------------------------------------------------------

    def _lookup(
        self,
        properties: dict[str, Any],
        key: str,
    ) -> tuple[PropertyDefinition | None, FieldEditResult | None]:
        definition = self.schema.get(key)
        if definition is None:
            return None, self._reject(
                properties,
                key,
                EditErrorCode.UNKNOWN_FIELD,
                f"'{self.schema.component_type}' has no property '{key}'",
            )
        if definition.type not in _VALIDATORS:
            return None, self._reject(
                properties,
                key,
                EditErrorCode.UNSUPPORTED_TYPE,
                f"Unsupported property type '{getattr(definition.type, 'value', definition.type)}' for '{key}'",
            )
        return definition, None

    def _items(
        self,
        properties: dict[str, Any],
        key: str,
        expected: PropertyType,
    ) -> tuple[PropertyDefinition | None, list, FieldEditResult | None]:
        definition, rejected = self._lookup(properties, key)
        if rejected:
            return None, [], rejected
        if definition.type != expected:
            return None, [], self._wrong_kind(properties, definition, expected)
        existing = current_value(definition, properties)
        return definition, list(existing) if isinstance(existing, list) else [], None

    def _wrong_kind(
        self,
        properties: dict[str, Any],
        definition: PropertyDefinition,
        expected: PropertyType,
    ) -> FieldEditResult:
        return self._reject(
            properties,
            definition.key,
            EditErrorCode.VALIDATION_ERROR,
            f"'{definition.key}' is a {definition.type.value} property, not {expected.value}",
        )

    def _bad_index(self, properties: dict[str, Any], key: str, index: int, length: int) -> FieldEditResult:
        return self._reject(
            properties,
            key,
            EditErrorCode.INDEX_OUT_OF_RANGE,
            f"'{key}' has no item at index {index} (length {length})",
        )

    @staticmethod
    def _accept(properties: dict[str, Any], key: str, value: Any) -> FieldEditResult:
        return FieldEditResult(ok=True, key=key, value=value, properties={**properties, key: value})

    @staticmethod
    def _reject(
        properties: dict[str, Any],
        key: str,
        code: EditErrorCode,
        message: str,
    ) -> FieldEditResult:
        logger.debug("Manual edit rejected: %s: %s", code.value, message)
        return FieldEditResult(
            ok=False,
            key=key,
            value=properties.get(key),
            properties=dict(properties),
            error=message,
            code=code,
        )


def _copy_items(items: list) -> list:
    return [dict(item) if isinstance(item, dict) else item for item in items]


def _set_in(
    definition: PropertyDefinition,
    container: Any,
    segments: list[str],
    value: Any,
) -> tuple[Any, tuple[EditErrorCode, str] | None]:
    """Recursively set *value* at *segments* below a composite definition."""
    head, rest = segments[0], segments[1:]

    if definition.type == PropertyType.ARRAY_OBJECT or definition.type == PropertyType.ARRAY_SIMPLE:
        items = container if isinstance(container, list) else []
        try:
            index = int(head)
        except ValueError:
            return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}' needs a numeric index, got '{head}'")
        if not 0 <= index < len(items):
            return None, (
                EditErrorCode.INDEX_OUT_OF_RANGE,
                f"'{definition.key}' has no item at index {index} (length {len(items)})",
            )
        if definition.type == PropertyType.ARRAY_SIMPLE:
            if rest:
                return None, (EditErrorCode.UNKNOWN_FIELD, f"'{definition.key}' items have no fields")
            if not isinstance(value, str):
                return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}' items must be text")
            items[index] = value
            return items, None
        if not rest:
            return None, (EditErrorCode.VALIDATION_ERROR, f"'{definition.key}.{index}' needs a field name")
        item = items[index] if isinstance(items[index], dict) else {}
        as_object = definition.model_copy(update={"type": PropertyType.OBJECT})
        updated, problem = _set_in(as_object, item, rest, value)
        if problem:
            return None, problem
        items[index] = updated
        return items, None

    if definition.type == PropertyType.OBJECT:
        obj = container if isinstance(container, dict) else {}
        child = definition.nested(head)
        if child is None:
            return None, (EditErrorCode.UNKNOWN_FIELD, f"'{definition.key}' has no field '{head}'")
        if rest:
            if child.type not in (PropertyType.OBJECT, PropertyType.ARRAY_OBJECT, PropertyType.ARRAY_SIMPLE):
                return None, (EditErrorCode.UNKNOWN_FIELD, f"'{child.key}' has no nested fields")
            updated, problem = _set_in(child, copy.deepcopy(current_value(child, obj)), rest, value)
        else:
            updated, problem = check_value(child, value)
        if problem:
            return None, problem
        obj[child.key] = updated
        return obj, None

    return None, (EditErrorCode.UNKNOWN_FIELD, f"'{definition.key}' has no nested fields")


def _collect_issues(
    definition: PropertyDefinition,
    value: Any,
    path: str,
    issues: list[PropertyIssue],
) -> None:
    if value is None or value == "":
        if definition.required and definition.default is None:
            issues.append(PropertyIssue(path, EditErrorCode.VALIDATION_ERROR, f"'{path}' is required"))
        return

    if definition.type == PropertyType.ARRAY_OBJECT:
        if not isinstance(value, list):
            issues.append(PropertyIssue(path, EditErrorCode.VALIDATION_ERROR, f"'{path}' expects a list of objects"))
            return
        for index, item in enumerate(value):
            if not isinstance(item, dict):
                issues.append(
                    PropertyIssue(f"{path}.{index}", EditErrorCode.VALIDATION_ERROR, "item must be an object")
                )
                continue
            for child in definition.object_schema or []:
                _collect_issues(child, item.get(child.key), f"{path}.{index}.{child.key}", issues)
        return

    if definition.type == PropertyType.OBJECT:
        if not isinstance(value, dict):
            issues.append(PropertyIssue(path, EditErrorCode.VALIDATION_ERROR, f"'{path}' expects an object"))
            return
        for child in definition.object_schema or []:
            _collect_issues(child, value.get(child.key), f"{path}.{child.key}", issues)
        return

    _, problem = check_value(definition, value)
    if problem:
        issues.append(PropertyIssue(path, problem[0], problem[1]))


def validate_properties(
    schema: ComponentPropertySchema | None,
    properties: dict[str, Any],
) -> list[PropertyIssue]:
    """Whole-bag validation; an unregistered component has nothing to check."""
    if schema is None:
        return []
    return ManualEditEngine(schema).validate_properties(properties)


def build_defaults(schema: ComponentPropertySchema | None) -> dict[str, Any]:
    """A fresh property bag holding every declared default."""
    if schema is None:
        return {}
    return ManualEditEngine(schema).build_defaults()
