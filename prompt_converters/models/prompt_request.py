"""Conversion request model."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from prompt_converters.conversion.processing import PromptProcessingType


class TargetProvider(str, Enum):
    """Wire format a conversion request is rendered into."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"
    CLAUDE = "claude"
    CLAUDE_TEXT = "claude_text"
    COHERE = "cohere"
    GOOGLE = "google"
    AI21 = "ai21"
    MISTRAL = "mistral"
    XAI = "xai"
    TEXT_COMPLETION = "text_completion"


class PromptRequest(BaseModel):
    """One prompt conversion request.

    ``caching_at_depth`` and ``processing_type`` fall back to configuration
    or the provider's own handling when left unset. Name inputs are total:
    ``None`` becomes an empty string (or an empty list for group names).
    """

    provider: TargetProvider
    messages: list[dict[str, Any]]
    model: str = ""

    char_name: str = ""
    user_name: str = ""
    group_names: list[str] = Field(default_factory=list)

    processing_type: PromptProcessingType | str | None = None
    use_system_prompt: bool = False
    tools: list[dict[str, Any]] = Field(default_factory=list)

    assistant_prefill: str = ""
    assistant_prefix_property: str | None = None

    max_tokens: int = 0
    reasoning_effort: str | None = None
    stream: bool = False
    caching_at_depth: int | None = None

    add_assistant_postfix: bool = True
    with_sys_prompt_support: bool = False
    human_sys_prompt: str = ""
    exclude_prefixes: bool = False

    @field_validator(
        "char_name", "user_name", "assistant_prefill", "human_sys_prompt", "model", mode="before"
    )
    @classmethod
    def _none_as_empty_string(cls, value: Any) -> Any:
        if value is None:
            return ""
        if not isinstance(value, str):
            return str(value)
        return value

    @field_validator("group_names", mode="before")
    @classmethod
    def _group_names_as_strings(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [str(name) for name in value]

    @field_validator("tools", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value
