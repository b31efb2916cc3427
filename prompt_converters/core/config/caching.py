"""Prompt caching configuration module.

Controls where Claude cache_control markers are injected and which TTL
they carry.
"""

from dataclasses import dataclass

from prompt_converters.core.config.schema import ConfigSchema
from prompt_converters.core.config.validation import load_env_var


@dataclass(frozen=True)
class CachingConfig:
    """Configuration for prompt caching markers.

    Attributes:
        caching_at_depth: Role-transition depth for message caching (-1 disables)
        extended_ttl: Use the 1h TTL instead of 5m
        system_prompt_cache: Mark the system prompt and tool definitions for caching
    """

    caching_at_depth: int
    extended_ttl: bool
    system_prompt_cache: bool


class CachingSettings:
    """Manages prompt caching configuration from environment variables."""

    @staticmethod
    def load() -> CachingConfig:
        """Load caching configuration using schema-based validation.

        Returns:
            CachingConfig with values from environment or defaults

        Raises:
            ConfigError: If any environment variable fails validation
        """
        return CachingConfig(
            caching_at_depth=load_env_var(ConfigSchema.CLAUDE_CACHING_AT_DEPTH),
            extended_ttl=load_env_var(ConfigSchema.CLAUDE_EXTENDED_TTL),
            system_prompt_cache=load_env_var(ConfigSchema.CLAUDE_ENABLE_SYSTEM_PROMPT_CACHE),
        )
