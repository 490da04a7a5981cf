"""Edit application & history manager.

Owns one editing session:

- gates submissions so at most one AI edit is in flight (across all
  selections)
- snapshots the targeted element/page by value before calling the gateway
- on success shallow-merges the patch into the *live* property bag through
  :class:`CanvasAccess`, appends a success record and clears the draft of the
  submitted selection
- on failure leaves every bag untouched, appends a failure record and keeps
  the draft so the user can retry
- routes manual field edits through the same merge

Phase machine::

    IDLE → SUBMITTING → APPLIED | FAILED → IDLE
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Literal

from pydantic import TypeAdapter, ValidationError

from config.component_registry import get_schema
from config.prompts.worksheet_edit import BASE64_PLACEHOLDER
from config.settings import get_settings
from errors.exceptions import UnknownPatchKeyError
from models.canvas import CanvasElement, ElementSelection, PageSelection
from models.edit import (
    EditFailure,
    EditPhase,
    EditResult,
    EditSuccess,
    EditTarget,
    QuickImprovement,
    WorksheetEdit,
    WorksheetEditChange,
    WorksheetEditContext,
    WorksheetEditPatch,
    WorksheetEditTarget,
)
from models.errors import EditErrorCode, classify_gateway_error, format_error
from services.canvas_store import CanvasAccess
from services.draft_cache import DraftStateCache
from services.edit_gateway import EditGateway
from services.edit_history import EditHistory
from services.manual_editor import FieldEditResult
from services.metrics import EditMetricsCollector, get_metrics_collector
from services.selection import selection_key

logger = logging.getLogger(__name__)

EMPTY_INSTRUCTION_ERROR = format_error(EditErrorCode.EMPTY_INSTRUCTION, "Please enter an instruction")

Listener = Callable[[], None]
UnknownKeyPolicy = Literal["accept", "reject"]
SelectionLike = PageSelection | ElementSelection


class EditSessionManager:
    """Applies AI patches and manual edits for one editing session.

    Args:
        gateway: Resolves instructions into patches.
        canvas: Live pages/elements; the only place bags are written.
        context: Worksheet context sent with every instruction.
        drafts: Draft cache shared with the instruction input.
        history: Edit log; a fresh one is created when omitted.
        unknown_key_policy: ``accept`` or ``reject`` patch keys the
            component schema does not declare; defaults to settings.
        metrics: Collector receiving one sample per resolved submission.
    """

    def __init__(
        self,
        gateway: EditGateway,
        canvas: CanvasAccess,
        context: WorksheetEditContext,
        *,
        drafts: DraftStateCache | None = None,
        history: EditHistory | None = None,
        unknown_key_policy: UnknownKeyPolicy | None = None,
        metrics: EditMetricsCollector | None = None,
    ) -> None:
        self._gateway = gateway
        self._canvas = canvas
        self._context = context
        self.drafts = drafts if drafts is not None else DraftStateCache()
        self._history = history if history is not None else EditHistory()
        self._policy: UnknownKeyPolicy = unknown_key_policy or get_settings().unknown_patch_key_policy
        self._metrics = metrics if metrics is not None else get_metrics_collector()

        self._phase = EditPhase.IDLE
        self._error: str | None = None
        self._last_changes: list[WorksheetEditChange] = []
        self._selection: SelectionLike | None = None
        self._listeners: list[Listener] = []

    # -- state ---------------------------------------------------------------

    @property
    def phase(self) -> EditPhase:
        return self._phase

    @property
    def is_editing(self) -> bool:
        return self._phase == EditPhase.SUBMITTING

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def history(self) -> EditHistory:
        return self._history

    @property
    def last_changes(self) -> list[WorksheetEditChange]:
        return list(self._last_changes)

    @property
    def context(self) -> WorksheetEditContext:
        return self._context

    @property
    def selection(self) -> SelectionLike | None:
        return self._selection

    @property
    def unknown_key_policy(self) -> UnknownKeyPolicy:
        return self._policy

    def clear_error(self) -> None:
        if self._error is not None:
            self._error = None
            self._notify()

    # -- observers -----------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it.

        Listeners run after every history append, ``is_editing`` flip and
        error change.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Edit listener %r failed", listener)

    # -- selection & drafts --------------------------------------------------

    def select(self, selection: SelectionLike | None) -> str:
        """Move the active selection and swap drafts; returns the visible text."""
        prev_key = selection_key(self._selection)
        self._selection = selection
        return self.drafts.on_selection_change(prev_key, selection_key(selection))

    def type_instruction(self, text: str) -> None:
        self.drafts.type_text(text)

    async def submit_draft(self) -> WorksheetEdit | None:
        """Submit the visible draft against the active selection."""
        return await self.submit(self._selection, self.drafts.visible_text)

    # -- AI path -------------------------------------------------------------

    async def submit(self, selection: SelectionLike | None, instruction: str) -> WorksheetEdit | None:
        """Send *instruction* for *selection* through the gateway.

        Returns the appended history record, or ``None`` when the request
        was rejected locally (empty instruction, nothing selected) or another
        edit is already in flight.
        """
        if self._busy(instruction):
            return None
        if not instruction or not instruction.strip():
            self._set_error(EMPTY_INSTRUCTION_ERROR)
            return None
        return await self._run(selection, instruction, clear_draft=True)

    async def quick_action(
        self,
        selection: SelectionLike | None,
        improvement: QuickImprovement,
    ) -> WorksheetEdit | None:
        """Run a canned instruction; the visible draft is left alone."""
        return await self._run(selection, improvement.instruction, clear_draft=False)

    async def _run(
        self,
        selection: SelectionLike | None,
        instruction: str,
        *,
        clear_draft: bool,
    ) -> WorksheetEdit | None:
        # Gate checked and taken before the first await.
        if self._busy(instruction):
            return None
        if selection is None:
            self._set_error(format_error(EditErrorCode.VALIDATION_ERROR, "Nothing is selected"))
            return None

        key = selection_key(selection)
        target = self._snapshot(selection)
        context = self._context

        self._phase = EditPhase.SUBMITTING
        self._error = None
        self._notify()
        logger.info("Submitting %s edit for %s: %.60s", target.type.value, key, instruction)

        t0 = time.monotonic()
        try:
            try:
                result = _as_edit_result(await self._gateway.submit(target, instruction, context))
            except Exception as exc:
                logger.exception("Edit gateway raised for %s", key)
                result = EditFailure(error=classify_gateway_error(str(exc) or type(exc).__name__))

            if isinstance(result, EditSuccess):
                result = self._apply_result(target, result)

            record = self._record(result, instruction, target.type, key)
            latency_ms = (time.monotonic() - t0) * 1000
            self._metrics.record_edit(
                status="ok" if record.success else "failed",
                latency_ms=latency_ms,
                component_type=target.component_type,
                error=record.error,
            )

            if record.success:
                self._phase = EditPhase.APPLIED
                self._last_changes = list(record.changes)
                if clear_draft:
                    self.drafts.on_submit(key)
                logger.info("Edit applied to %s (%d changes, %.0fms)", key, len(record.changes), latency_ms)
            else:
                self._phase = EditPhase.FAILED
                self._error = record.error
                logger.info("Edit failed for %s: %s", key, record.error)
            self._notify()
            return record
        finally:
            self._phase = EditPhase.IDLE
            self._notify()

    def _snapshot(self, selection: SelectionLike) -> WorksheetEditTarget:
        """Capture the targeted element/page by value."""
        page_id = selection.page.id
        if isinstance(selection, ElementSelection):
            live = self._canvas.get_element(page_id, selection.element.id) or selection.element
            return WorksheetEditTarget(
                type=EditTarget.COMPONENT,
                page_id=page_id,
                element_id=live.id,
                data=live.model_dump(by_alias=True, mode="json"),
            )
        page = self._canvas.get_page(page_id) or selection.page
        return WorksheetEditTarget(
            type=EditTarget.PAGE,
            page_id=page_id,
            data=page.model_dump(by_alias=True, mode="json"),
        )

    def _apply_result(self, target: WorksheetEditTarget, result: EditSuccess) -> EditResult:
        """Write a successful patch; policy or canvas problems turn it into a failure."""
        try:
            if target.type == EditTarget.PAGE:
                self._apply_page_patch(target.page_id, result.patch)
            else:
                self._apply_component_patch(target, result.patch)
        except UnknownPatchKeyError as exc:
            logger.warning("Patch rejected: %s", exc)
            return EditFailure(error=format_error(EditErrorCode.UNKNOWN_PATCH_KEY, str(exc)))
        except KeyError as exc:
            logger.warning("Edit target vanished before the patch landed: %s", exc)
            return EditFailure(error=format_error(EditErrorCode.INTERNAL_ERROR, "Edit target no longer exists"))
        return result

    def _apply_component_patch(self, target: WorksheetEditTarget, patch: WorksheetEditPatch) -> None:
        if not patch.properties:
            return
        live = self._canvas.get_element(target.page_id, target.element_id)
        if live is None:
            raise KeyError(f"{target.page_id}/{target.element_id}")
        merged = self.merge_patch(live.properties, patch.properties, component_type=live.type)
        self._canvas.replace_properties(target.page_id, live.id, merged)

    def _apply_page_patch(self, page_id: str, patch: WorksheetEditPatch) -> None:
        live = self._canvas.get_page(page_id)
        if live is None:
            raise KeyError(page_id)
        title = patch.title if patch.title is not None else live.title
        elements = live.elements
        if patch.elements is not None:
            elements = preserve_image_urls(live.elements, patch.elements)
        self._canvas.replace_page(page_id, title=title, elements=elements)

    def _record(
        self,
        result: EditResult,
        instruction: str,
        target: EditTarget,
        key: str | None,
    ) -> WorksheetEdit:
        if isinstance(result, EditSuccess):
            record = WorksheetEdit(
                instruction=instruction,
                changes=tuple(result.changes),
                target=target,
                selection_key=key,
                success=True,
            )
        else:
            record = WorksheetEdit(
                instruction=instruction,
                target=target,
                selection_key=key,
                success=False,
                error=result.error,
            )
        return self._history.append(record)

    # -- merge discipline ----------------------------------------------------

    def merge_patch(
        self,
        properties: dict[str, Any],
        patch: dict[str, Any],
        *,
        component_type: str | None = None,
    ) -> dict[str, Any]:
        """Shallow top-level merge; keys absent from *patch* are untouched.

        Under the ``reject`` policy a patch naming a key the component schema
        does not declare raises :class:`UnknownPatchKeyError` and nothing is
        merged.  Components without a registered schema are not checked.
        """
        if self._policy == "reject" and component_type is not None:
            schema = get_schema(component_type)
            if schema is not None:
                declared = set(schema.keys())
                unknown = [key for key in patch if key not in declared]
                if unknown:
                    raise UnknownPatchKeyError(component_type, unknown)
        return {**properties, **patch}

    # -- manual path ---------------------------------------------------------

    def apply_manual_edit(self, selection: ElementSelection, result: FieldEditResult) -> bool:
        """Write an accepted manual field edit into the live bag.

        Only the edited key is merged, so fields changed by an AI patch since
        the editor was rendered are kept.  Rejected results write nothing.
        """
        if not result.ok:
            return False
        page_id = selection.page.id
        live = self._canvas.get_element(page_id, selection.element.id)
        if live is None:
            logger.warning("Manual edit for missing element %s/%s", page_id, selection.element.id)
            return False
        merged = {**live.properties, **result.patch}
        self._canvas.replace_properties(page_id, live.id, merged)
        self._notify()
        return True

    # -- internals -----------------------------------------------------------

    def _busy(self, instruction: str) -> bool:
        if self._phase != EditPhase.SUBMITTING:
            return False
        logger.info(
            "%s, ignoring: %.60s",
            format_error(EditErrorCode.EDIT_IN_PROGRESS, "another edit is running"),
            instruction,
        )
        return True

    def _set_error(self, message: str) -> None:
        self._error = message
        self._notify()


_RESULT_ADAPTER: TypeAdapter[EditResult] = TypeAdapter(EditResult)


def _as_edit_result(raw: Any) -> EditResult:
    """Coerce a gateway return value into ``EditSuccess | EditFailure``.

    Adapters may hand back the wire dict (``{"success": ..., "patch": ...}``)
    instead of a model; anything that fits neither shape becomes an
    ``INTERNAL_ERROR`` failure.
    """
    if isinstance(raw, (EditSuccess, EditFailure)):
        return raw
    if isinstance(raw, dict) and "success" in raw:
        try:
            return _RESULT_ADAPTER.validate_python(raw)
        except ValidationError as exc:
            logger.warning("Gateway result failed validation (%d errors): %.200r", exc.error_count(), raw)
    else:
        logger.warning("Gateway returned an unusable result: %.200r", raw)
    return EditFailure(
        error=format_error(EditErrorCode.INTERNAL_ERROR, f"Gateway returned an invalid result ({type(raw).__name__})")
    )
