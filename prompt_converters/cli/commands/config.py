"""Configuration commands."""

import sys

import typer
from rich.console import Console
from rich.markdown import Markdown

from prompt_converters.cli.presenters.config import ConfigPresenter
from prompt_converters.core.config.schema import ConfigSchema
from prompt_converters.core.config.validation import load_all_specs

app = typer.Typer(help="Configuration inspection")


@app.command()
def show() -> None:
    """Show the effective configuration."""
    presenter = ConfigPresenter(Console())
    if presenter.present(ConfigSchema.all_specs(), load_all_specs()):
        sys.exit(1)


@app.command()
def docs(
    raw: bool = typer.Option(False, "--raw", help="Print plain Markdown"),
) -> None:
    """Show the environment variable reference."""
    text = ConfigSchema.generate_markdown_docs()
    if raw:
        typer.echo(text)
        return
    Console().print(Markdown(text))
