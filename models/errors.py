"""Structured error codes for the property-editing core.

Every local rejection and every gateway failure carries one of these codes
so the rendering layer can choose between inline feedback and the error
banner.  User-visible strings follow the format::

    {ERROR_CODE}: {human_readable_detail}
"""

from __future__ import annotations

import re
from enum import Enum


class EditErrorCode(str, Enum):
    """Canonical error codes."""

    # Local validation: never reaches the gateway, no history record
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMPTY_INSTRUCTION = "EMPTY_INSTRUCTION"
    EDIT_IN_PROGRESS = "EDIT_IN_PROGRESS"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    # Gateway outcomes: recorded as failed edits
    API_ERROR = "API_ERROR"
    EDIT_FAILED = "EDIT_FAILED"
    MAX_RETRIES_EXCEEDED = "MAX_RETRIES_EXCEEDED"
    PARSE_ERROR = "PARSE_ERROR"
    LLM_PROVIDER_ERROR = "LLM_PROVIDER_ERROR"
    UNKNOWN_PATCH_KEY = "UNKNOWN_PATCH_KEY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


LOCAL_CODES = frozenset({
    EditErrorCode.VALIDATION_ERROR,
    EditErrorCode.EMPTY_INSTRUCTION,
    EditErrorCode.EDIT_IN_PROGRESS,
    EditErrorCode.UNSUPPORTED_TYPE,
    EditErrorCode.UNKNOWN_FIELD,
    EditErrorCode.OUT_OF_RANGE,
    EditErrorCode.INDEX_OUT_OF_RANGE,
})


def format_error(code: EditErrorCode, detail: str) -> str:
    """Format an error for display.

    Returns:
        ``{ERROR_CODE}: {detail}``
    """
    return f"{code.value}: {detail}"


# Patterns matched against raw exception text, first match wins.
_PARSE_RE = re.compile(r"parse|json|missing \"patch\"", re.IGNORECASE)
_LLM_PROVIDER_RE = re.compile(
    r"timeout|timed out|connection|context length|token|content filter|safety|rate limit",
    re.IGNORECASE,
)
_RETRIES_RE = re.compile(r"after \d+ attempts", re.IGNORECASE)


def classify_gateway_error(error_text: str) -> str:
    """Classify raw exception text from a gateway call into a display string.

    Classification order (first match wins):
        1. Exhausted retries.
        2. Unparseable model output.
        3. Provider trouble — timeout / connection / token limits / safety.
        4. Fallback — ``INTERNAL_ERROR``.
    """
    if _RETRIES_RE.search(error_text):
        return format_error(EditErrorCode.MAX_RETRIES_EXCEEDED, error_text)
    if _PARSE_RE.search(error_text):
        return format_error(EditErrorCode.PARSE_ERROR, error_text)

    err_lower = error_text.lower()
    if "content filter" in err_lower or "safety" in err_lower:
        return format_error(EditErrorCode.LLM_PROVIDER_ERROR, "Content filtered by safety policy")
    if _LLM_PROVIDER_RE.search(error_text):
        return format_error(EditErrorCode.LLM_PROVIDER_ERROR, error_text)

    return format_error(EditErrorCode.INTERNAL_ERROR, error_text)
