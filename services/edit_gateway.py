"""AI edit gateway — contract, response parsing and the HTTP adapter.

The gateway turns ``(target snapshot, instruction, context)`` into an
:data:`EditResult`.  Implementations must never raise for expected failures:
network trouble, 4xx/5xx responses and unparseable replies all come back as
:class:`EditFailure` so the edit manager can record them.

- :class:`EditGateway` — the abstract contract
- :func:`parse_edit_response` — model text → :class:`EditSuccess`
- :func:`sanitize_for_prompt` — strips inline base64 images before sending
- :class:`HttpEditGateway` — POSTs to a remote inference service (httpx)
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from config.prompts.worksheet_edit import BASE64_PLACEHOLDER
from config.settings import get_settings
from errors.exceptions import EditGatewayError, PatchParseError
from models.edit import (
    EditFailure,
    EditResult,
    EditSuccess,
    WorksheetEditContext,
    WorksheetEditRequest,
    WorksheetEditTarget,
)
from models.errors import EditErrorCode, classify_gateway_error, format_error

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

# Property keys that may carry inline image data.
_IMAGE_KEYS = frozenset({"url", "imageUrl"})


class EditGateway(ABC):
    """Natural-language → patch boundary."""

    @abstractmethod
    async def submit(
        self,
        target: WorksheetEditTarget,
        instruction: str,
        context: WorksheetEditContext,
    ) -> EditResult:
        """Resolve one instruction against a snapshot.

        Args:
            target: By-value snapshot of the element or page being edited.
            instruction: Free text, passed verbatim.
            context: Worksheet context, passed through untouched.
        """


# ── Response parsing ─────────────────────────────────────────


def parse_edit_response(text: str) -> EditSuccess:
    """Parse a model/service reply into an :class:`EditSuccess`.

    Accepts bare JSON, JSON inside markdown fences, or JSON surrounded by
    prose.  The object must contain ``patch``; ``changes`` defaults to ``[]``.

    Raises:
        PatchParseError: No JSON object, invalid JSON, or wrong shape.
    """
    cleaned = _FENCE_RE.sub("", text or "").strip()
    match = _OBJECT_RE.search(cleaned)
    if not match:
        raise PatchParseError("no JSON object found", raw_text=text)

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise PatchParseError(f"invalid JSON ({exc.msg})", raw_text=text) from exc

    if not isinstance(data, dict) or "patch" not in data:
        raise PatchParseError('missing "patch" object', raw_text=text)

    try:
        return EditSuccess.model_validate({
            "patch": data["patch"] or {},
            "changes": data.get("changes") or [],
        })
    except ValidationError as exc:
        raise PatchParseError(f"unexpected patch shape ({exc.error_count()} errors)", raw_text=text) from exc


def sanitize_for_prompt(data: Any) -> Any:
    """Return a copy of *data* with inline ``data:image`` URLs replaced.

    Base64 images blow up the prompt; the edit manager restores the original
    URLs when a patch omits them.
    """
    if isinstance(data, dict):
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if key in _IMAGE_KEYS and isinstance(value, str) and value.startswith("data:image"):
                cleaned[key] = BASE64_PLACEHOLDER
            else:
                cleaned[key] = sanitize_for_prompt(value)
        return cleaned
    if isinstance(data, list):
        return [sanitize_for_prompt(item) for item in data]
    return data


# ── HTTP adapter ─────────────────────────────────────────────


class HttpEditGateway(EditGateway):
    """Gateway backed by a remote ``/api/worksheet/edit`` style endpoint.

    Retries transport errors and 5xx responses with a linear backoff
    (``retry_delay * attempt``); 4xx responses are final.  The caller's
    manual retry (resubmitting the preserved draft) is the only retry above
    this layer.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self._url = url or settings.edit_gateway_url
        self._timeout = timeout if timeout is not None else settings.edit_gateway_timeout
        self._max_retries = max_retries if max_retries is not None else settings.edit_gateway_max_retries
        self._retry_delay = retry_delay if retry_delay is not None else settings.edit_gateway_retry_delay
        self._http = client
        self._owns_client = client is None

    # -- lifecycle -----------------------------------------------------------

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers={"Content-Type": "application/json"},
            )
            logger.info("HttpEditGateway started — url=%s", self._url)
        return self._http

    async def close(self) -> None:
        if self._http is not None and self._owns_client:
            await self._http.aclose()
            self._http = None
            logger.info("HttpEditGateway closed")

    # -- contract ------------------------------------------------------------

    async def submit(
        self,
        target: WorksheetEditTarget,
        instruction: str,
        context: WorksheetEditContext,
    ) -> EditResult:
        safe_target = target.model_copy(update={"data": sanitize_for_prompt(target.data)})
        request = WorksheetEditRequest(edit_target=safe_target, instruction=instruction, context=context)
        payload = request.model_dump(by_alias=True, mode="json", exclude_none=True)

        try:
            return await self._post_with_retry(payload)
        except EditGatewayError as exc:
            logger.warning("Edit gateway failed (%s): %s", exc.code, exc)
            return EditFailure(error=_describe_failure(exc))
        except Exception as exc:
            logger.exception("Unexpected edit gateway error")
            return EditFailure(error=classify_gateway_error(str(exc) or type(exc).__name__))

    # -- retry logic ---------------------------------------------------------

    async def _post_with_retry(self, payload: dict[str, Any]) -> EditSuccess:
        client = self._ensure_client()
        attempts = self._max_retries + 1
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            t0 = time.monotonic()
            try:
                response = await client.post(self._url, json=payload)
                elapsed_ms = (time.monotonic() - t0) * 1000
                logger.info("POST %s → %d (%.0fms)", self._url, response.status_code, elapsed_ms)
                return _read_response(response)
            except EditGatewayError as exc:
                if not exc.retryable:
                    raise
                last_exc = exc
            except httpx.TransportError as exc:
                last_exc = exc

            logger.warning("Edit attempt %d/%d failed: %s", attempt, attempts, last_exc)
            if attempt < attempts:
                await asyncio.sleep(self._retry_delay * attempt)

        raise EditGatewayError(
            f"Edit failed after {attempts} attempts: {last_exc}",
            status_code=500,
            code="MAX_RETRIES_EXCEEDED",
        )


def _describe_failure(exc: EditGatewayError) -> str:
    """Prefer the text classification; fall back to the error's own code."""
    described = classify_gateway_error(str(exc))
    if described.startswith(EditErrorCode.INTERNAL_ERROR.value) and exc.code in EditErrorCode.__members__:
        return format_error(EditErrorCode[exc.code], str(exc))
    return described


def _read_response(response: httpx.Response) -> EditSuccess:
    """Map one HTTP response to a success or a typed gateway error."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if response.status_code >= 400:
        detail = body.get("error") if isinstance(body, dict) else None
        raise EditGatewayError(
            detail or (response.text[:300] if response.text else f"HTTP {response.status_code}"),
            status_code=response.status_code,
            code="API_ERROR",
        )

    if not isinstance(body, dict):
        # Some services reply with text/markdown; fall back to lenient parsing.
        return parse_edit_response(response.text)

    if not body.get("success", False):
        raise EditGatewayError(body.get("error") or "Edit failed", status_code=500, code="EDIT_FAILED")

    try:
        return EditSuccess.model_validate({
            "patch": body.get("patch") or {},
            "changes": body.get("changes") or [],
        })
    except ValidationError as exc:
        raise PatchParseError(f"unexpected patch shape ({exc.error_count()} errors)") from exc
