"""LLM edit gateway — resolves edit instructions with a PydanticAI agent.

The model is asked for raw JSON (``{"patch": ..., "changes": [...]}``) and
the reply is parsed leniently with :func:`parse_edit_response`, since
providers frequently wrap JSON in markdown fences.  Component prompts carry
the component's property schema; page prompts carry the full registry so the
model only emits known component types.
"""

from __future__ import annotations

import logging
import time

from pydantic_ai import Agent

from agents.provider import create_model
from config.component_registry import get_registry_description, is_editable
from config.llm_config import LLMConfig
from config.prompts.worksheet_edit import build_component_edit_prompt, build_page_edit_prompt
from config.settings import get_settings
from models.edit import (
    EditFailure,
    EditResult,
    EditTarget,
    WorksheetEditContext,
    WorksheetEditTarget,
)
from models.errors import classify_gateway_error
from services.edit_gateway import EditGateway, parse_edit_response, sanitize_for_prompt

logger = logging.getLogger(__name__)

EDIT_SYSTEM_PROMPT = (
    "You are a precise worksheet editing assistant for early-childhood "
    "educational content. You always answer with a single JSON object and "
    "nothing else."
)


class LLMEditGateway(EditGateway):
    """Gateway that calls an LLM directly instead of a remote edit service.

    Args:
        model: A PydanticAI model instance or ``provider/model`` name.
               Defaults to ``settings.edit_model``.
        llm_config: Generation parameters; defaults to
                    ``settings.get_edit_llm_config()``.
    """

    def __init__(self, model=None, llm_config: LLMConfig | None = None) -> None:
        settings = get_settings()
        if model is None or isinstance(model, str):
            model = create_model(model)
        self._config = llm_config or settings.get_edit_llm_config()
        self._page_config = self._config.merge(LLMConfig(max_tokens=settings.page_max_tokens))
        self._agent = Agent(
            model=model,
            output_type=str,
            system_prompt=EDIT_SYSTEM_PROMPT,
            retries=settings.edit_agent_retries,
            defer_model_check=True,
        )

    def build_prompt(
        self,
        target: WorksheetEditTarget,
        instruction: str,
        context: WorksheetEditContext,
    ) -> str:
        data = sanitize_for_prompt(target.data)
        if target.type == EditTarget.PAGE:
            return build_page_edit_prompt(
                page_data=data,
                instruction=instruction,
                context=context,
                component_library=get_registry_description(),
            )
        component_type = target.component_type or "unknown"
        return build_component_edit_prompt(
            component_type=component_type,
            component_data=data,
            instruction=instruction,
            context=context,
            schema_info=get_registry_description(component_type) if is_editable(component_type) else "",
        )

    async def submit(
        self,
        target: WorksheetEditTarget,
        instruction: str,
        context: WorksheetEditContext,
    ) -> EditResult:
        prompt = self.build_prompt(target, instruction, context)
        config = self._page_config if target.type == EditTarget.PAGE else self._config

        logger.info("LLM edit (%s) for instruction: %.60s", target.type.value, instruction)
        t0 = time.monotonic()
        try:
            result = await self._agent.run(prompt, model_settings=config.to_model_settings())
            parsed = parse_edit_response(result.output)
        except Exception as exc:
            logger.warning("LLM edit failed: %s", exc, exc_info=True)
            return EditFailure(error=classify_gateway_error(str(exc) or type(exc).__name__))

        logger.info(
            "LLM edit resolved in %.0fms (%d changes)",
            (time.monotonic() - t0) * 1000,
            len(parsed.changes),
        )
        return parsed
