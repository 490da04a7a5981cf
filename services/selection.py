"""Selection model — stable keys for the current edit target.

A selection key identifies *what* is being edited independently of its
contents: the same element on the same page always maps to the same key,
so drafts survive re-renders and property changes.
"""

from __future__ import annotations

from models.canvas import ElementSelection, PageSelection
from models.edit import EditTarget

SelectionLike = PageSelection | ElementSelection | None


def selection_key(selection: SelectionLike) -> str | None:
    """``page-<pageId>`` / ``element-<pageId>-<elementId>``; ``None`` when nothing is selected."""
    if selection is None:
        return None
    if isinstance(selection, ElementSelection):
        return f"element-{selection.page.id}-{selection.element.id}"
    return f"page-{selection.page.id}"


def selection_target(selection: SelectionLike) -> EditTarget | None:
    if selection is None:
        return None
    if isinstance(selection, ElementSelection):
        return EditTarget.COMPONENT
    return EditTarget.PAGE
