"""Custom exception hierarchy for the worksheet property editor."""

from errors.exceptions import (
    EditGatewayError,
    PatchParseError,
    SchemaDefinitionError,
    UnknownPatchKeyError,
)

__all__ = [
    "EditGatewayError",
    "PatchParseError",
    "SchemaDefinitionError",
    "UnknownPatchKeyError",
]
