"""Loading and checking of the configuration environment variables.

Each ConfigSchema entry is read from ``os.environ``, converted from its
string form and checked by the entry's validator. Every failure surfaces as
a ConfigError naming the variable and the offending raw value.
"""

import os
from collections.abc import Callable
from typing import Any

from prompt_converters.core.config.schema import ConfigSchema, EnvVarSpec

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
FALSE_VALUES = frozenset({"false", "0", "no", "off", ""})


class ConfigError(Exception):
    """An environment variable could not be converted or failed validation.

    Attributes:
        env_var: The environment variable name
        value: The raw value that was rejected
        message: What was wrong with it
    """

    def __init__(self, env_var: str, value: str, message: str) -> None:
        self.env_var = env_var
        self.value = value
        self.message = message
        super().__init__(f"{env_var}={value}: {message}")


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"expected one of {', '.join(sorted((TRUE_VALUES | FALSE_VALUES) - {''}))}")


def _parse_int(value: str) -> int:
    return int(value.strip())


PARSERS: dict[type, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: _parse_int,
    str: str,
}


def load_env_var(spec: EnvVarSpec) -> Any:
    """Read one variable, returning its default when it is unset.

    Args:
        spec: The variable's ConfigSchema entry.

    Returns:
        The converted value.

    Raises:
        ConfigError: If the raw value cannot be converted to ``spec.type_hint``
            or the spec's validator rejects it.
    """
    raw_value = os.environ.get(spec.name)
    if raw_value is None:
        return spec.default

    parse = spec.coerce or PARSERS.get(spec.type_hint, str)
    try:
        value = parse(raw_value)
    except (ValueError, TypeError) as e:
        raise ConfigError(
            spec.name, raw_value, f"Cannot convert to {spec.type_hint.__name__}: {e}"
        ) from e

    if spec.validator is None:
        return value

    try:
        accepted = spec.validator(value)
    except (TypeError, IndexError) as e:
        # e.g. a blank LOG_LEVEL has no first word to check
        raise ConfigError(spec.name, raw_value, f"Validation error: {e}") from e
    if not accepted:
        raise ConfigError(spec.name, raw_value, f"Not an accepted value: {spec.description}")
    return value


def load_all_specs() -> dict[str, Any]:
    """Load every ConfigSchema variable without stopping at the first failure.

    Returns:
        Values keyed by env var name. Variables that failed to load map to
        their ConfigError.
    """
    values: dict[str, Any] = {}
    for spec in ConfigSchema.all_specs().values():
        try:
            values[spec.name] = load_env_var(spec)
        except ConfigError as e:
            values[spec.name] = e
    return values


def validate_all() -> list[ConfigError]:
    """Return the errors of every invalid variable (empty when all load)."""
    return [value for value in load_all_specs().values() if isinstance(value, ConfigError)]
