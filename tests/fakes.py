"""Test doubles shared across the edit tests."""

from __future__ import annotations

import asyncio

from models.edit import (
    EditFailure,
    EditResult,
    EditSuccess,
    WorksheetEditContext,
    WorksheetEditTarget,
)
from services.edit_gateway import EditGateway


class ScriptedGateway(EditGateway):
    """Fake gateway returning queued results in order.

    ``hold()`` makes the next calls block until ``release()`` so tests can
    observe the in-flight state.  Every call is recorded in ``calls``.
    """

    def __init__(self, *results: EditResult | Exception) -> None:
        self.results: list[EditResult | Exception] = list(results)
        self.calls: list[tuple[WorksheetEditTarget, str, WorksheetEditContext]] = []
        self._gate: asyncio.Event | None = None

    def queue(self, result: EditResult | Exception) -> None:
        self.results.append(result)

    def hold(self) -> None:
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def submit(self, target, instruction, context):
        self.calls.append((target, instruction, context))
        if self._gate is not None:
            await self._gate.wait()
        result = self.results.pop(0) if self.results else EditFailure(error="EDIT_FAILED: nothing queued")
        if isinstance(result, Exception):
            raise result
        return result


def success(properties=None, changes=None, **patch) -> EditSuccess:
    """Build an EditSuccess; ``properties`` / ``title`` / ``elements`` form the patch."""
    body = dict(patch)
    if properties is not None:
        body["properties"] = properties
    return EditSuccess.model_validate({"patch": body, "changes": changes or []})
