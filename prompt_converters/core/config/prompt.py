"""Prompt shaping configuration module.

This module handles settings that change the text the converters emit:
- The placeholder user message used to keep prompts non-empty
- The Mistral prefix continuation flag

Uses schema-based loading for automatic type coercion and validation.
"""

from dataclasses import dataclass

from prompt_converters.core.config.schema import ConfigSchema
from prompt_converters.core.config.validation import load_env_var


@dataclass(frozen=True)
class PromptConfig:
    """Configuration for prompt shaping.

    Attributes:
        placeholder: Filler user message for empty or misaligned prompts
        mistral_enable_prefix: Whether a trailing Mistral assistant message becomes a prefix
    """

    placeholder: str
    mistral_enable_prefix: bool


class PromptSettings:
    """Manages prompt shaping configuration from environment variables."""

    @staticmethod
    def load() -> PromptConfig:
        """Load prompt configuration using schema-based validation.

        Returns:
            PromptConfig with values from environment or defaults

        Raises:
            ConfigError: If any environment variable fails validation
        """
        return PromptConfig(
            placeholder=load_env_var(ConfigSchema.PROMPT_PLACEHOLDER),
            mistral_enable_prefix=load_env_var(ConfigSchema.MISTRAL_ENABLE_PREFIX),
        )
