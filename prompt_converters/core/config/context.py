"""Context managers for test isolation without mutating global state.

The context managers handle environment variable setup/teardown automatically
and never touch the global singleton.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager

from prompt_converters.core.config.config import Config
from prompt_converters.core.config.schema import ConfigSchema


@contextmanager
def temporary_config(
    env_overrides: dict[str, str] | None = None,
    clear_known: bool = True,
) -> Generator[Config, None, None]:
    """Create a temporary config instance for testing.

    Args:
        env_overrides: Environment variables to set for this context.
            Keys are env var names (e.g., "LOG_LEVEL"), values are strings.
        clear_known: If True, unset every variable declared in ConfigSchema
            first so ambient shell settings cannot leak into the instance.

    Yields:
        A new Config instance with the test environment

    Example:
        with temporary_config({"PROMPT_PLACEHOLDER": "Go on."}) as cfg:
            assert cfg.prompt_placeholder == "Go on."
        # Original environment restored automatically
    """
    original_env = os.environ.copy()

    try:
        if clear_known:
            for spec in ConfigSchema.all_specs().values():
                os.environ.pop(spec.name, None)

        if env_overrides:
            os.environ.update(env_overrides)

        yield Config()

    finally:
        os.environ.clear()
        os.environ.update(original_env)
