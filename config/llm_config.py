"""Reusable LLM generation parameters.

LLMConfig is a standalone Pydantic model that can be:
- built from Settings as the edit adapter's default,
- overridden per target (page edits get a larger token budget),
- passed per-call for one-off overrides.

Priority chain (low → high):
    .env defaults  →  target-level LLMConfig  →  per-call overrides
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """LLM generation parameters.

    All fields are optional.  ``None`` means "use the model's default".
    """

    model: str | None = Field(default=None, description="'provider/model' identifier")
    max_tokens: int | None = Field(default=None, description="Max tokens to generate")
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    top_k: int | None = Field(
        default=None, ge=0, description="Gemini/Qwen supported; ignored by OpenAI"
    )
    seed: int | None = Field(default=None, description="Random seed for reproducibility")
    response_format: str | None = Field(
        default=None, description="'json_object' for structured output"
    )

    def merge(self, overrides: LLMConfig) -> LLMConfig:
        """Return a new LLMConfig: *self* as base, *overrides* wins on non-None fields."""
        base = self.model_dump(exclude_none=True)
        base.update(overrides.model_dump(exclude_none=True))
        return LLMConfig(**base)

    def to_model_settings(self) -> dict:
        """Convert to a pydantic-ai ``model_settings`` dict.

        ``top_k`` and ``response_format`` travel as ``extra_body`` since they
        are provider extensions.
        """
        kw: dict = {}
        for field in ("max_tokens", "temperature", "top_p", "seed"):
            val = getattr(self, field)
            if val is not None:
                kw[field] = val
        extra: dict = {}
        if self.top_k is not None:
            extra["top_k"] = self.top_k
        if self.response_format:
            extra["response_format"] = {"type": self.response_format}
        if extra:
            kw["extra_body"] = extra
        return kw
