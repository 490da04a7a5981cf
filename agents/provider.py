"""Model factory for the LLM edit adapter.

Edit models are named ``"provider/model"`` (``"gemini/gemini-2.5-flash"``,
``"anthropic/claude-sonnet-4-5"``).  Anthropic and Gemini use their native
PydanticAI models; DashScope and Z.ai go through their OpenAI-compatible
endpoints; anything else is sent to OpenAI.
"""

from __future__ import annotations

import logging
from typing import Callable

from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# prefix → (base_url, api key attribute on Settings)
_OPENAI_COMPATIBLE: dict[str, tuple[str, str]] = {
    "dashscope": ("https://dashscope.aliyuncs.com/compatible-mode/v1", "dashscope_api_key"),
    "zai": ("https://open.bigmodel.cn/api/paas/v4/", "zai_api_key"),
}


def _anthropic(model_id: str, settings: Settings) -> Model:
    from pydantic_ai.models.anthropic import AnthropicModel
    from pydantic_ai.providers.anthropic import AnthropicProvider

    return AnthropicModel(model_id, provider=AnthropicProvider(api_key=settings.anthropic_api_key))


def _gemini(model_id: str, settings: Settings) -> Model:
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    return GoogleModel(model_id, provider=GoogleProvider(api_key=settings.gemini_api_key))


_NATIVE: dict[str, Callable[[str, Settings], Model]] = {
    "anthropic": _anthropic,
    "gemini": _gemini,
}


def split_model_name(name: str) -> tuple[str, str]:
    """Split ``"provider/model"``; a bare name is treated as OpenAI."""
    if "/" not in name:
        return "openai", name
    prefix, model_id = name.split("/", 1)
    return prefix, model_id


def create_model(model_name: str | None = None) -> Model:
    """Build the PydanticAI model used for edits.

    Args:
        model_name: ``"provider/model"`` identifier. Defaults to
            ``settings.edit_model``.
    """
    settings = get_settings()
    prefix, model_id = split_model_name(model_name or settings.edit_model)

    builder = _NATIVE.get(prefix)
    if builder is not None:
        return builder(model_id, settings)

    if prefix in _OPENAI_COMPATIBLE:
        base_url, key_attr = _OPENAI_COMPATIBLE[prefix]
        provider = OpenAIProvider(api_key=getattr(settings, key_attr), base_url=base_url)
        return OpenAIChatModel(model_id, provider=provider)

    if prefix != "openai":
        logger.warning("Unknown model provider %r, falling back to OpenAI", prefix)
    return OpenAIChatModel(model_id, provider=OpenAIProvider(api_key=settings.openai_api_key))
