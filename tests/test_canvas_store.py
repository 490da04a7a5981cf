"""Tests for services/canvas_store.py — in-memory canvas access."""

import pytest

from models.canvas import CanvasElement


def test_reads_are_copies(canvas):
    element = canvas.get_element("p-1", "el-1")
    element.properties["size"] = "large"
    assert canvas.get_element("p-1", "el-1").properties["size"] == "medium"


def test_missing_lookups_return_none(canvas):
    assert canvas.get_page("nope") is None
    assert canvas.get_element("p-1", "nope") is None
    assert canvas.get_element("nope", "el-1") is None


def test_replace_properties(canvas):
    canvas.replace_properties("p-1", "el-2", {"title": "Ducks"})
    assert canvas.get_element("p-1", "el-2").properties == {"title": "Ducks"}


def test_replace_properties_missing_element(canvas):
    with pytest.raises(KeyError):
        canvas.replace_properties("p-1", "el-404", {})


def test_replace_page_keeps_layout_fields(canvas):
    element = CanvasElement(id="el-5", type="voice-recorder", position={"x": 10, "y": 20}, z_index=3)
    canvas.replace_page("p-1", title="New", elements=[element])

    page = canvas.get_page("p-1")
    assert page.title == "New"
    assert page.elements[0].position == {"x": 10, "y": 20}
    assert page.elements[0].z_index == 3


def test_replace_missing_page(canvas):
    with pytest.raises(KeyError):
        canvas.replace_page("nope", title="", elements=[])
