"""Runtime config value accessors.

These functions provide config values at runtime without requiring
direct config imports, so converters never capture configuration at
import time.

Config Context Propagation:
    Config is propagated via ContextVar for O(1) lookup. Request handling
    code may install a request-scoped Config with ``config_context``; every
    accessor resolves that first and falls back to the module singleton.

Usage:
    from prompt_converters.core.config.accessors import prompt_placeholder
    messages.append({"role": "user", "content": prompt_placeholder()})
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)

# Request-scoped config context
_config_context: ContextVar[Config | None] = ContextVar("config_context", default=None)


def _get_config_from_context() -> Config | None:
    """Get config from the request context via ContextVar.

    Returns None outside of a ``config_context`` block (e.g., CLI, tests).
    """
    return _config_context.get(None)


def _get_global_fallback() -> Config:
    """Fallback to the module-level config for non-request contexts."""
    # Lazy import to avoid circular dependency
    from . import config as config_module

    return config_module.get_config()


def current_config() -> Config:
    """Return the request-scoped config if one is installed, else the singleton."""
    cfg = _get_config_from_context()
    if cfg is None:
        cfg = _get_global_fallback()
    return cfg


@contextmanager
def config_context(cfg: Config) -> Generator[Config, None, None]:
    """Install ``cfg`` as the request-scoped config for the enclosed block."""
    token = _config_context.set(cfg)
    logger.debug("Request-scoped config installed")
    try:
        yield cfg
    finally:
        _config_context.reset(token)


def log_level() -> str:
    """Get the log_level config value."""
    return current_config().log_level


def log_conversion_metrics() -> bool:
    """Get the log_conversion_metrics config value."""
    return current_config().log_conversion_metrics


def prompt_placeholder() -> str:
    """Get the prompt_placeholder config value."""
    return current_config().prompt_placeholder


def mistral_enable_prefix() -> bool:
    """Get the mistral_enable_prefix config value."""
    return current_config().mistral_enable_prefix


def caching_at_depth() -> int:
    """Get the caching_at_depth config value."""
    return current_config().caching_at_depth


def cache_ttl() -> str:
    """Get the cache TTL string ("5m" or "1h")."""
    return current_config().cache_ttl


def system_prompt_cache() -> bool:
    """Get the system_prompt_cache config value."""
    return current_config().system_prompt_cache
