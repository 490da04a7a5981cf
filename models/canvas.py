"""Canvas models — elements, pages and the current selection.

These mirror the shapes the canvas system owns.  The editing core only
reads them and rewrites ``CanvasElement.properties`` (or a page's title /
elements for page-level edits); it never creates element ids or types.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field

from models.base import CamelModel


class CanvasElement(CamelModel):
    """A component placed on a worksheet page."""

    id: str
    type: str  # schema lookup key, e.g. "tap-image"
    properties: dict[str, Any] = Field(default_factory=dict)
    # Layout fields are passed through untouched.
    position: dict[str, float] | None = None
    size: dict[str, float] | None = None
    z_index: int = 0
    locked: bool = False
    visible: bool = True


class WorksheetPage(CamelModel):
    """One canvas page and the elements on it."""

    id: str
    title: str = ""
    elements: list[CanvasElement] = Field(default_factory=list)

    def find_element(self, element_id: str) -> CanvasElement | None:
        for element in self.elements:
            if element.id == element_id:
                return element
        return None


class PageSelection(CamelModel):
    """The whole page is the edit target."""

    kind: Literal["page"] = "page"
    page: WorksheetPage


class ElementSelection(CamelModel):
    """A single element within a page is the edit target."""

    kind: Literal["element"] = "element"
    page: WorksheetPage
    element: CanvasElement


Selection = Annotated[
    Union[PageSelection, ElementSelection],
    Field(discriminator="kind"),
]
