"""Configuration package.

Exposes the Config facade, the module singleton accessor and the schema
validation error.
"""

from prompt_converters.core.config.accessors import config_context, current_config
from prompt_converters.core.config.config import Config, get_config
from prompt_converters.core.config.validation import ConfigError

__all__ = ["Config", "ConfigError", "config_context", "current_config", "get_config"]
