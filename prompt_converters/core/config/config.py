"""Configuration singleton for the prompt converters.

This module provides a simple singleton that gives direct access to
configuration values without unnecessary abstraction.

Configuration is organized into focused modules:
- observability: Log level and conversion metrics logging
- prompt: Placeholder text and provider continuation flags
- caching: Claude prompt caching depth, TTL and system prompt caching
"""

from prompt_converters.core.config.caching import CachingSettings
from prompt_converters.core.config.observability import LoggingSettings
from prompt_converters.core.config.prompt import PromptSettings
from prompt_converters.core.constants import Constants


class Config:
    """Configuration singleton with direct access to all settings.

    All configuration values are loaded at initialization time from
    environment variables using schema-based validation.
    """

    def __init__(self) -> None:
        self._logging_config = LoggingSettings.load()
        self._prompt_config = PromptSettings.load()
        self._caching_config = CachingSettings.load()

    # Logging settings
    @property
    def log_level(self) -> str:
        return self._logging_config.log_level

    @property
    def log_conversion_metrics(self) -> bool:
        return self._logging_config.log_conversion_metrics

    # Prompt settings
    @property
    def prompt_placeholder(self) -> str:
        return self._prompt_config.placeholder

    @property
    def mistral_enable_prefix(self) -> bool:
        return self._prompt_config.mistral_enable_prefix

    # Caching settings
    @property
    def caching_at_depth(self) -> int:
        return self._caching_config.caching_at_depth

    @property
    def extended_cache_ttl(self) -> bool:
        return self._caching_config.extended_ttl

    @property
    def system_prompt_cache(self) -> bool:
        return self._caching_config.system_prompt_cache

    @property
    def cache_ttl(self) -> str:
        if self.extended_cache_ttl:
            return Constants.CACHE_TTL_EXTENDED
        return Constants.CACHE_TTL_DEFAULT

    @classmethod
    def reset_singleton(cls) -> None:
        """Reset the global config singleton for test isolation.

        This method is primarily used by the test suite to ensure
        clean state between tests. It recreates the config singleton
        after the test environment has been modified.

        WARNING: Never call this in production code!
        """
        global config
        config = cls()


# Module-level singleton
config = Config()


def get_config() -> Config:
    """Return the current module-level singleton (survives reset_singleton)."""
    return config
