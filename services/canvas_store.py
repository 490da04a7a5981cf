"""Canvas access — the seam between the editing core and the canvas system.

The edit manager reads pages/elements and writes property bags or page
contents only through :class:`CanvasAccess`.  :class:`InMemoryCanvas` is the
reference implementation used by tests and headless callers.
"""

from __future__ import annotations

import threading
from typing import Any, Protocol

from models.canvas import CanvasElement, WorksheetPage


class CanvasAccess(Protocol):
    """Read/write operations the editing core needs from the canvas."""

    def get_page(self, page_id: str) -> WorksheetPage | None: ...

    def get_element(self, page_id: str, element_id: str) -> CanvasElement | None: ...

    def replace_properties(self, page_id: str, element_id: str, properties: dict[str, Any]) -> None: ...

    def replace_page(self, page_id: str, *, title: str, elements: list[CanvasElement]) -> None: ...


class InMemoryCanvas:
    """Pages held in memory, returned as deep copies.

    Callers never get a live reference, so a snapshot taken from this canvas
    cannot change behind the caller's back.
    """

    def __init__(self, pages: list[WorksheetPage] | None = None) -> None:
        self._lock = threading.RLock()
        self._pages: dict[str, WorksheetPage] = {}
        for page in pages or []:
            self.add_page(page)

    def add_page(self, page: WorksheetPage) -> None:
        with self._lock:
            self._pages[page.id] = page.model_copy(deep=True)

    def get_page(self, page_id: str) -> WorksheetPage | None:
        with self._lock:
            page = self._pages.get(page_id)
            return page.model_copy(deep=True) if page else None

    def get_element(self, page_id: str, element_id: str) -> CanvasElement | None:
        with self._lock:
            page = self._pages.get(page_id)
            element = page.find_element(element_id) if page else None
            return element.model_copy(deep=True) if element else None

    def replace_properties(self, page_id: str, element_id: str, properties: dict[str, Any]) -> None:
        with self._lock:
            page = self._pages.get(page_id)
            element = page.find_element(element_id) if page else None
            if element is None:
                raise KeyError(f"Element '{element_id}' not found on page '{page_id}'")
            element.properties = dict(properties)

    def replace_page(self, page_id: str, *, title: str, elements: list[CanvasElement]) -> None:
        with self._lock:
            page = self._pages.get(page_id)
            if page is None:
                raise KeyError(f"Page '{page_id}' not found")
            page.title = title
            page.elements = [element.model_copy(deep=True) for element in elements]
