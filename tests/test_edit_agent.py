"""Tests for agents/edit_agent.py — LLM-backed edit gateway."""

import json

import pytest
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from agents.edit_agent import LLMEditGateway
from config.settings import get_settings
from models.edit import EditFailure, EditSuccess, EditTarget, WorksheetEditTarget


def _component_target(element) -> WorksheetEditTarget:
    return WorksheetEditTarget(
        type=EditTarget.COMPONENT,
        page_id="p-1",
        element_id=element.id,
        data=element.model_dump(by_alias=True, mode="json"),
    )


def _page_target(page) -> WorksheetEditTarget:
    return WorksheetEditTarget(type=EditTarget.PAGE, page_id=page.id, data=page.model_dump(by_alias=True, mode="json"))


def _capturing_model(reply: str, prompts: list[str]) -> FunctionModel:
    """FunctionModel that records the user prompt and answers with *reply*."""

    def model_fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        for message in messages:
            for part in getattr(message, "parts", []):
                if isinstance(part, UserPromptPart):
                    prompts.append(str(part.content))
        return ModelResponse(parts=[TextPart(content=reply)])

    return FunctionModel(model_fn)


# ── Successful replies ───────────────────────────────────────


@pytest.mark.asyncio
async def test_component_edit_parses_reply(tap_image, edit_context):
    reply = json.dumps({
        "patch": {"properties": {"size": "large"}},
        "changes": [{"field": "size", "oldValue": "medium", "newValue": "large", "description": "Bigger"}],
    })
    gateway = LLMEditGateway(model=TestModel(custom_output_text=reply))

    result = await gateway.submit(_component_target(tap_image), "Make it bigger", edit_context)

    assert isinstance(result, EditSuccess)
    assert result.patch.properties == {"size": "large"}
    assert result.changes[0].field == "size"


@pytest.mark.asyncio
async def test_fenced_reply_accepted(tap_image, edit_context):
    reply = '```json\n{"patch": {"properties": {"caption": "Hello cow"}}}\n```'
    gateway = LLMEditGateway(model=TestModel(custom_output_text=reply))

    result = await gateway.submit(_component_target(tap_image), "New caption", edit_context)

    assert isinstance(result, EditSuccess)
    assert result.patch.properties == {"caption": "Hello cow"}


# ── Prompt construction ──────────────────────────────────────


@pytest.mark.asyncio
async def test_component_prompt_carries_schema_and_context(tap_image, edit_context):
    prompts: list[str] = []
    gateway = LLMEditGateway(model=_capturing_model('{"patch": {}}', prompts))

    await gateway.submit(_component_target(tap_image), "Make it bigger", edit_context)

    prompt = prompts[-1]
    assert "**COMPONENT TYPE:** tap-image" in prompt
    assert "**USER INSTRUCTION:** Make it bigger" in prompt
    assert "Age Group: 3-5" in prompt
    assert "`size` [select]" in prompt
    assert "Allowed values: 'small', 'medium', 'large'" in prompt


def test_prompt_strips_inline_images(tap_image, edit_context):
    element = tap_image.model_copy(update={"properties": {"imageUrl": "data:image/png;base64,QUJD"}})
    gateway = LLMEditGateway(model=TestModel())

    prompt = gateway.build_prompt(_component_target(element), "caption", edit_context)

    assert "QUJD" not in prompt
    assert "[BASE64_IMAGE_DATA_OMITTED]" in prompt


def test_unregistered_component_prompt(edit_context):
    from models.canvas import CanvasElement

    element = CanvasElement(id="el-7", type="hero-banner", properties={"text": "Hi"})
    gateway = LLMEditGateway(model=TestModel())

    prompt = gateway.build_prompt(_component_target(element), "shorter", edit_context)

    assert "**COMPONENT TYPE:** hero-banner" in prompt
    assert "(No schema registered for this component.)" in prompt


def test_page_prompt_lists_component_library(page, edit_context):
    gateway = LLMEditGateway(model=TestModel())

    prompt = gateway.build_prompt(_page_target(page), "Add a title", edit_context)

    assert "**PAGE DATA:**" in prompt
    assert "`cause-effect`" in prompt
    assert "COMPLETE updated elements array" in prompt


def test_page_edits_get_larger_token_budget():
    gateway = LLMEditGateway(model=TestModel())
    assert gateway._page_config.max_tokens == get_settings().page_max_tokens
    assert gateway._config.max_tokens == get_settings().max_tokens


# ── Failures ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_unparseable_reply_is_failure(tap_image, edit_context):
    gateway = LLMEditGateway(model=TestModel(custom_output_text="I cannot do that."))

    result = await gateway.submit(_component_target(tap_image), "bigger", edit_context)

    assert isinstance(result, EditFailure)
    assert result.error.startswith("PARSE_ERROR: Failed to parse AI response")


@pytest.mark.asyncio
async def test_model_exception_is_failure(tap_image, edit_context):
    def model_fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        raise TimeoutError("request timed out")

    gateway = LLMEditGateway(model=FunctionModel(model_fn))

    result = await gateway.submit(_component_target(tap_image), "bigger", edit_context)

    assert isinstance(result, EditFailure)
    assert result.error == "LLM_PROVIDER_ERROR: request timed out"
