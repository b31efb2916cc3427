"""Logging configuration module."""

from dataclasses import dataclass

from prompt_converters.core.config.schema import ConfigSchema
from prompt_converters.core.config.validation import load_env_var


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for log output.

    Attributes:
        log_level: Root log level name (first word, upper-cased)
        log_conversion_metrics: Emit one summary line per conversion
    """

    log_level: str
    log_conversion_metrics: bool


class LoggingSettings:
    """Manages logging configuration from environment variables."""

    @staticmethod
    def load() -> LoggingConfig:
        # Extract just the first word to tolerate trailing comments in .env files
        raw_level = load_env_var(ConfigSchema.LOG_LEVEL)
        return LoggingConfig(
            log_level=raw_level.split()[0].upper(),
            log_conversion_metrics=load_env_var(ConfigSchema.LOG_CONVERSION_METRICS),
        )
