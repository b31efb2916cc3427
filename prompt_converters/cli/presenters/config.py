"""Presenter for configuration display in CLI."""

from typing import Any

from rich.console import Console
from rich.table import Table

from prompt_converters.core.config.schema import EnvVarSpec
from prompt_converters.core.config.validation import ConfigError


class ConfigPresenter:
    """Renders effective configuration values as a Rich table.

    Contains no loading logic: the specs and loaded values are passed in.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def present(self, specs: dict[str, EnvVarSpec], values: dict[str, Any]) -> int:
        """Print the configuration table followed by any validation errors.

        Args:
            specs: Schema specs, keyed by attribute name.
            values: Loaded values keyed by env var name; failed loads are
                ConfigError instances.

        Returns:
            The number of invalid variables.
        """
        table = Table(title="Configuration")
        table.add_column("Variable", style="cyan")
        table.add_column("Value", style="green")
        table.add_column("Default", style="dim")
        table.add_column("Description")

        errors: list[ConfigError] = []
        for spec in sorted(specs.values(), key=lambda s: s.name):
            value = values.get(spec.name, spec.default)
            if isinstance(value, ConfigError):
                errors.append(value)
                shown = "[red]invalid[/red]"
            else:
                shown = repr(value) if isinstance(value, str) else str(value)
            table.add_row(spec.name, shown, str(spec.default), spec.description)

        self.console.print(table)

        for error in errors:
            self.console.print(f"[red]❌ {error}[/red]")
        return len(errors)
