"""Pydantic Settings — typed configuration with .env auto-loading."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from config.llm_config import LLMConfig


class Settings(BaseSettings):
    """Editor configuration loaded from environment / .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── LLM edit adapter ─────────────────────────────────────
    edit_model: str = "gemini/gemini-2.5-flash"
    max_tokens: int = 4096
    page_max_tokens: int = 8192  # page edits return the complete elements list
    edit_temperature: float | None = 0.7
    edit_top_p: float | None = 0.9
    edit_top_k: int | None = 40
    edit_agent_retries: int = 1

    # Provider API keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    gemini_api_key: str = ""
    dashscope_api_key: str = ""
    zai_api_key: str = ""

    # ── HTTP edit gateway ────────────────────────────────────
    edit_gateway_url: str = "http://localhost:3000/api/worksheet/edit"
    edit_gateway_timeout: float = 60.0  # seconds
    edit_gateway_max_retries: int = 2  # retries after the first attempt
    edit_gateway_retry_delay: float = 1.0  # seconds, multiplied by attempt number

    # ── Editing engine ───────────────────────────────────────
    # "accept" keeps undeclared patch keys verbatim; "reject" fails the edit.
    unknown_patch_key_policy: Literal["accept", "reject"] = "accept"

    # ── Helpers ───────────────────────────────────────────────

    def get_edit_llm_config(self) -> LLMConfig:
        """Build the :class:`LLMConfig` used by the LLM edit adapter."""
        return LLMConfig(
            model=self.edit_model,
            max_tokens=self.max_tokens,
            temperature=self.edit_temperature,
            top_p=self.edit_top_p,
            top_k=self.edit_top_k,
            response_format="json_object",
        )


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor for application settings."""
    return Settings()
