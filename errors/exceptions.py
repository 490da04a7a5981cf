"""Domain-specific exceptions for the property-editing core.

The manual edit engine never raises; these exceptions live at the edges —
schema construction, gateway adapters and patch application — and are
converted into failure records by the edit manager.
"""

from __future__ import annotations


class SchemaDefinitionError(Exception):
    """A property schema violates a structural invariant.

    Raised while the static schema table is built, so a malformed table
    fails at import time rather than during an edit.
    """

    def __init__(self, owner: str, message: str) -> None:
        self.owner = owner
        super().__init__(f"Invalid schema '{owner}': {message}")


class EditGatewayError(Exception):
    """The edit gateway could not produce a usable patch.

    ``status_code`` mirrors the HTTP status when the failure came from a
    remote service; ``code`` is an :class:`models.errors.EditErrorCode` value.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str = "EDIT_FAILED",
    ) -> None:
        self.status_code = status_code
        self.code = code
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        """4xx responses are final; everything else may be retried."""
        if self.status_code is None:
            return True
        return not 400 <= self.status_code < 500


class PatchParseError(EditGatewayError):
    """The model reply could not be turned into a patch."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        self.raw_text = raw_text
        super().__init__(f"Failed to parse AI response: {message}", code="PARSE_ERROR")


class UnknownPatchKeyError(EditGatewayError):
    """A patch names properties the component schema does not declare.

    Only raised when the unknown-key policy is ``reject``.
    """

    def __init__(self, component_type: str, keys: list[str]) -> None:
        self.component_type = component_type
        self.keys = keys
        super().__init__(
            f"Patch for '{component_type}' contains undeclared properties: {', '.join(keys)}",
            code="UNKNOWN_PATCH_KEY",
        )
