"""Main CLI entry point for prompt-converters."""

import typer
from rich.console import Console

from prompt_converters.cli.commands import budget, config, convert

app = typer.Typer(
    name="prompt-converters",
    help="Prompt converters CLI - render chat prompts in provider wire formats",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="convert")(convert.convert)
app.command(name="budget")(budget.budget)
app.add_typer(config.app, name="config", help="Configuration inspection")


@app.command()
def version() -> None:
    """Show version information."""
    from prompt_converters import __version__

    console = Console()
    console.print(f"[bold cyan]prompt-converters[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Prompt converters CLI."""
    from prompt_converters.core.logging import configure_root_logging

    configure_root_logging("DEBUG" if verbose else None)


if __name__ == "__main__":
    app()
