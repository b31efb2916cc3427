"""Environment variables understood by the prompt converters.

Every variable is declared once here as an EnvVarSpec. Both
``validation.load_env_var`` and the ``config docs`` CLI command read
from this registry.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from prompt_converters.core.constants import Constants


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Target type (int, str or bool)
        description: Human-readable description for docs
        validator: Optional custom validation function
        coerce: Optional function to convert string to target type
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    coerce: Callable[[str], Any] | None = None


class ConfigSchema:
    """All configuration variables, one EnvVarSpec attribute each.

    Attributes are grouped by the settings dataclass that loads them:
    logging, prompt shaping and Claude prompt caching.
    """

    # === Logging Settings ===

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        validator=lambda x: x.split()[0].upper()
        in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    LOG_CONVERSION_METRICS = EnvVarSpec(
        name="LOG_CONVERSION_METRICS",
        default=False,
        type_hint=bool,
        description="Log a summary line (message, part and tool counts) for every conversion",
    )

    # === Prompt Settings ===

    PROMPT_PLACEHOLDER = EnvVarSpec(
        name="PROMPT_PLACEHOLDER",
        default=Constants.DEFAULT_PROMPT_PLACEHOLDER,
        type_hint=str,
        description="Filler user message inserted when a prompt would otherwise be empty "
        "or break strict role alternation",
        validator=lambda x: bool(x.strip()),
    )

    MISTRAL_ENABLE_PREFIX = EnvVarSpec(
        name="MISTRAL_ENABLE_PREFIX",
        default=False,
        type_hint=bool,
        description="Mark a trailing assistant message as a Mistral prefix continuation",
    )

    # === Prompt Caching Settings ===

    CLAUDE_CACHING_AT_DEPTH = EnvVarSpec(
        name="CLAUDE_CACHING_AT_DEPTH",
        default=-1,
        type_hint=int,
        description="Role-transition depth for Claude cache_control markers (-1 disables)",
        validator=lambda x: x >= -1,
    )

    CLAUDE_EXTENDED_TTL = EnvVarSpec(
        name="CLAUDE_EXTENDED_TTL",
        default=False,
        type_hint=bool,
        description="Use the 1h cache TTL instead of the default 5m",
    )

    CLAUDE_ENABLE_SYSTEM_PROMPT_CACHE = EnvVarSpec(
        name="CLAUDE_ENABLE_SYSTEM_PROMPT_CACHE",
        default=False,
        type_hint=bool,
        description="Mark the Claude system prompt and tool definitions for caching",
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications.

        Returns:
            Dictionary mapping spec names to EnvVarSpec objects
        """
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }

    @classmethod
    def get_spec(cls, name: str) -> EnvVarSpec | None:
        """Get specification for a specific env var by name.

        Args:
            name: The environment variable name (e.g., "LOG_LEVEL")

        Returns:
            EnvVarSpec if found, None otherwise
        """
        for spec in cls.all_specs().values():
            if spec.name == name:
                return spec
        return None

    @classmethod
    def generate_markdown_docs(cls) -> str:
        """Generate Markdown documentation for all environment variables.

        Returns:
            Markdown documentation string
        """
        lines = ["# Configuration Options\n\n"]
        lines.extend(
            [
                "This document is auto-generated from `ConfigSchema`.\n\n",
                "## Environment Variables\n\n",
            ]
        )

        specs = cls.all_specs()
        for _name, spec in sorted(specs.items()):
            default_repr = f"`{spec.default}`" if spec.default is not None else "None"
            lines.extend(
                [
                    f"### `{spec.name}`\n\n",
                    f"- **Type**: `{spec.type_hint.__name__}`\n",
                    f"- **Default**: {default_repr}\n",
                    f"- **Description**: {spec.description}\n\n",
                ]
            )

        return "\n".join(lines)
