"""Tests for services/selection.py and the Selection union."""

from pydantic import TypeAdapter

from models.canvas import ElementSelection, PageSelection, Selection
from models.edit import EditTarget
from services.selection import selection_key, selection_target


def test_page_key(page_selection):
    assert selection_key(page_selection) == "page-p-1"
    assert selection_target(page_selection) == EditTarget.PAGE


def test_element_key(element_selection):
    assert selection_key(element_selection) == "element-p-1-el-1"
    assert selection_target(element_selection) == EditTarget.COMPONENT


def test_no_selection():
    assert selection_key(None) is None
    assert selection_target(None) is None


def test_key_ignores_contents(page, tap_image):
    """Same page + element ids give the same key even after properties change."""
    edited = tap_image.model_copy(update={"properties": {"size": "large"}})
    assert selection_key(ElementSelection(page=page, element=tap_image)) == selection_key(
        ElementSelection(page=page, element=edited)
    )


def test_page_and_element_keys_differ(page, tap_image):
    assert selection_key(PageSelection(page=page)) != selection_key(ElementSelection(page=page, element=tap_image))


def test_selection_union_discriminates_on_kind(page, tap_image):
    adapter = TypeAdapter(Selection)
    parsed = adapter.validate_python({
        "kind": "element",
        "page": page.model_dump(by_alias=True),
        "element": tap_image.model_dump(by_alias=True),
    })
    assert isinstance(parsed, ElementSelection)
    assert isinstance(adapter.validate_python({"kind": "page", "page": {"id": "p-9"}}), PageSelection)
