"""Edit models — gateway contract, patches and history records.

Defines the data exchanged with the AI edit gateway:
- WorksheetEditContext: worksheet-level context passed through untouched
- WorksheetEditPatch: the partial update returned by the gateway
- EditSuccess / EditFailure: the two shapes of an EditResult
- WorksheetEdit: one immutable history record per resolved request
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Union

from pydantic import Field

from models.base import CamelModel, FrozenCamelModel
from models.canvas import CanvasElement


class EditTarget(str, Enum):
    """What an instruction is applied to."""

    COMPONENT = "component"
    PAGE = "page"


class EditPhase(str, Enum):
    """Lifecycle of one submission through the edit manager."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    APPLIED = "applied"
    FAILED = "failed"


class WorksheetEditContext(FrozenCamelModel):
    """Worksheet context sent alongside every instruction."""

    topic: str
    age_group: str
    difficulty: Literal["easy", "medium", "hard"] = "easy"
    language: str = "en"
    user_id: str | None = None  # token accounting only


class WorksheetEditChange(FrozenCamelModel):
    """One change reported by the gateway."""

    field: str  # dot-path into properties
    description: str = ""
    old_value: Any = None
    new_value: Any = None


class WorksheetEditPatch(CamelModel):
    """Partial update returned by the gateway.

    Component targets use ``properties``; page targets use ``title`` and/or
    the complete ``elements`` list.
    """

    properties: dict[str, Any] | None = None
    title: str | None = None
    elements: list[CanvasElement] | None = None

    def is_empty(self) -> bool:
        return self.properties is None and self.title is None and self.elements is None


class EditSuccess(CamelModel):
    success: Literal[True] = True
    patch: WorksheetEditPatch = Field(default_factory=WorksheetEditPatch)
    changes: list[WorksheetEditChange] = Field(default_factory=list)


class EditFailure(CamelModel):
    success: Literal[False] = False
    error: str


# Resolved by the Literal `success` flag.
EditResult = Union[EditSuccess, EditFailure]


class WorksheetEditTarget(FrozenCamelModel):
    """Snapshot of what an instruction targets, captured by value at submission."""

    type: EditTarget
    page_id: str
    element_id: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def component_type(self) -> str | None:
        if self.type != EditTarget.COMPONENT:
            return None
        return self.data.get("type")


class WorksheetEditRequest(CamelModel):
    """Payload the HTTP gateway posts to the inference service."""

    edit_target: WorksheetEditTarget
    instruction: str
    context: WorksheetEditContext


def _new_edit_id() -> str:
    return f"edit-{uuid.uuid4().hex[:12]}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorksheetEdit(FrozenCamelModel):
    """Immutable history record, created when a request resolves."""

    id: str = Field(default_factory=_new_edit_id)
    instruction: str
    changes: tuple[WorksheetEditChange, ...] = ()
    timestamp: datetime = Field(default_factory=_utcnow)
    target: EditTarget = EditTarget.COMPONENT
    selection_key: str | None = None
    success: bool
    error: str | None = None


class QuickImprovement(FrozenCamelModel):
    """A canned instruction offered as a one-click action."""

    id: str
    label: str
    icon: str = ""
    description: str = ""
    instruction: str
