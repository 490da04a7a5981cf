"""Tests for config/component_registry.py — schema lookup and description."""

import pytest

from config.component_registry import (
    COMPONENT_REGISTRY,
    _build_registry,
    get_registry_description,
    get_schema,
    is_editable,
    list_component_types,
)
from config.property_schemas import PROPERTY_SCHEMA_TABLE
from errors.exceptions import SchemaDefinitionError
from models.property_schema import PropertyType

EXPECTED_TYPES = [
    "tap-image",
    "simple-drag-drop",
    "color-matcher",
    "simple-counter",
    "memory-cards",
    "sorting-game",
    "sequence-builder",
    "shape-tracer",
    "emotion-recognizer",
    "sound-matcher",
    "simple-puzzle",
    "pattern-builder",
    "cause-effect",
    "reward-collector",
    "voice-recorder",
]


# ── Lookup ───────────────────────────────────────────────────


def test_all_interactive_components_registered():
    assert list_component_types() == EXPECTED_TYPES


def test_unknown_type_has_no_schema():
    """Unregistered types mean "no editable properties", not an error."""
    assert get_schema("hero-banner") is None
    assert is_editable("hero-banner") is False


def test_tap_image_size_options():
    size = get_schema("tap-image").get("size")
    assert size.type == PropertyType.SELECT
    assert size.default == "medium"
    assert size.option_values() == ["small", "medium", "large"]


def test_counter_count_bounds():
    count = get_schema("simple-counter").get("objects").nested("count")
    assert (count.min, count.max) == (1, 20)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        COMPONENT_REGISTRY["new"] = get_schema("tap-image")  # type: ignore[index]


def test_duplicate_component_type_is_startup_error():
    table = [PROPERTY_SCHEMA_TABLE[0], PROPERTY_SCHEMA_TABLE[0]]
    with pytest.raises(SchemaDefinitionError, match="registered twice"):
        _build_registry(table)


# ── Description ──────────────────────────────────────────────


def test_description_single_component():
    text = get_registry_description("simple-drag-drop")
    assert text.startswith("## Editable Component Properties")
    assert "`simple-drag-drop`" in text
    assert "`snapDistance` [number]" in text
    assert "[range: 50.0..200.0]" in text
    assert "`tap-image`" not in text


def test_description_includes_nested_fields_and_options():
    text = get_registry_description("cause-effect")
    assert "`pairs` [array-object] (required)" in text
    assert "`cause` [object]" in text
    assert "`emoji` [string]" in text

    tap = get_registry_description("tap-image")
    assert "Allowed values: 'small', 'medium', 'large'" in tap


def test_description_all_components():
    text = get_registry_description()
    for component_type in EXPECTED_TYPES:
        assert f"`{component_type}`" in text


def test_description_unknown_component_is_header_only():
    assert get_registry_description("hero-banner").strip() == "## Editable Component Properties"
