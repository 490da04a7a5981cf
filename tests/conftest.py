"""Shared pytest fixtures for the property-editing tests.

Provides:
- ``edit_context``: a WorksheetEditContext for a toddler worksheet
- ``tap_image`` / ``counter`` / ``drag_drop``: sample elements
- ``page`` / ``canvas``: one page holding the sample elements
- ``element_selection`` / ``page_selection``: selections on that page
- ``gateway``: a scripted fake gateway
- ``metrics_collector``: fresh EditMetricsCollector per test
- ``manager``: EditSessionManager wired to the fixtures above
"""

from __future__ import annotations

import pytest

from models.canvas import CanvasElement, ElementSelection, PageSelection, WorksheetPage
from models.edit import WorksheetEditContext
from services.canvas_store import InMemoryCanvas
from services.edit_manager import EditSessionManager
from services.metrics import EditMetricsCollector

from tests.fakes import ScriptedGateway


@pytest.fixture
def edit_context() -> WorksheetEditContext:
    return WorksheetEditContext(topic="Farm animals", age_group="3-5", difficulty="easy", language="en")


@pytest.fixture
def tap_image() -> CanvasElement:
    return CanvasElement(
        id="el-1",
        type="tap-image",
        properties={
            "imageUrl": "https://img.example.com/cow.png",
            "caption": "Moo!",
            "size": "medium",
            "animation": "bounce",
        },
    )


@pytest.fixture
def counter() -> CanvasElement:
    return CanvasElement(
        id="el-2",
        type="simple-counter",
        properties={
            "title": "Count the ducks",
            "objects": [{"imageUrl": "", "count": 3, "label": "ducks"}],
        },
    )


@pytest.fixture
def drag_drop() -> CanvasElement:
    return CanvasElement(
        id="el-3",
        type="simple-drag-drop",
        properties={"title": "Feed the animals", "snapDistance": 80},
    )


@pytest.fixture
def page(tap_image, counter, drag_drop) -> WorksheetPage:
    return WorksheetPage(id="p-1", title="Animals", elements=[tap_image, counter, drag_drop])


@pytest.fixture
def canvas(page) -> InMemoryCanvas:
    return InMemoryCanvas([page])


@pytest.fixture
def element_selection(page, tap_image) -> ElementSelection:
    return ElementSelection(page=page, element=tap_image)


@pytest.fixture
def page_selection(page) -> PageSelection:
    return PageSelection(page=page)


@pytest.fixture
def gateway() -> ScriptedGateway:
    return ScriptedGateway()


@pytest.fixture
def metrics_collector() -> EditMetricsCollector:
    """Fresh metrics collector — isolated per test."""
    return EditMetricsCollector()


@pytest.fixture
def manager(gateway, canvas, edit_context, metrics_collector) -> EditSessionManager:
    return EditSessionManager(
        gateway,
        canvas,
        edit_context,
        unknown_key_policy="accept",
        metrics=metrics_collector,
    )
