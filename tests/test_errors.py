"""Tests for models/errors.py and errors/exceptions.py."""

import pytest

from errors import EditGatewayError, PatchParseError, SchemaDefinitionError, UnknownPatchKeyError
from models.errors import LOCAL_CODES, EditErrorCode, classify_gateway_error, format_error


# ── format_error ──────────────────────────────────────────────


def test_format_error():
    assert format_error(EditErrorCode.OUT_OF_RANGE, "count must be at most 20") == (
        "OUT_OF_RANGE: count must be at most 20"
    )


def test_local_codes_exclude_gateway_outcomes():
    assert EditErrorCode.EMPTY_INSTRUCTION in LOCAL_CODES
    assert EditErrorCode.API_ERROR not in LOCAL_CODES
    assert EditErrorCode.PARSE_ERROR not in LOCAL_CODES


# ── classify_gateway_error ────────────────────────────────────


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Edit failed after 3 attempts: boom", "MAX_RETRIES_EXCEEDED: Edit failed after 3 attempts: boom"),
        ("Failed to parse AI response: no JSON object found", "PARSE_ERROR: Failed to parse AI response: no JSON object found"),
        ("Response blocked by content filter", "LLM_PROVIDER_ERROR: Content filtered by safety policy"),
        ("Request timed out", "LLM_PROVIDER_ERROR: Request timed out"),
        ("Rate limit reached for model", "LLM_PROVIDER_ERROR: Rate limit reached for model"),
        ("context length exceeded", "LLM_PROVIDER_ERROR: context length exceeded"),
        ("something odd", "INTERNAL_ERROR: something odd"),
    ],
)
def test_classify_gateway_error(text, expected):
    assert classify_gateway_error(text) == expected


def test_retries_win_over_provider_text():
    result = classify_gateway_error("Edit failed after 2 attempts: connection refused")
    assert result.startswith("MAX_RETRIES_EXCEEDED")


# ── Exceptions ────────────────────────────────────────────────


def test_schema_definition_error_message():
    err = SchemaDefinitionError("tap-image", "duplicate property key 'size'")
    assert str(err) == "Invalid schema 'tap-image': duplicate property key 'size'"
    assert err.owner == "tap-image"
    assert not isinstance(err, ValueError)


@pytest.mark.parametrize("status, retryable", [(None, True), (500, True), (503, True), (400, False), (422, False)])
def test_gateway_error_retryable(status, retryable):
    assert EditGatewayError("x", status_code=status).retryable is retryable


def test_patch_parse_error():
    err = PatchParseError("no JSON object found", raw_text="hello")
    assert str(err) == "Failed to parse AI response: no JSON object found"
    assert err.code == "PARSE_ERROR"
    assert err.raw_text == "hello"
    assert isinstance(err, EditGatewayError)


def test_unknown_patch_key_error():
    err = UnknownPatchKeyError("tap-image", ["sparkle", "glow"])
    assert err.keys == ["sparkle", "glow"]
    assert err.code == "UNKNOWN_PATCH_KEY"
    assert "sparkle, glow" in str(err)
