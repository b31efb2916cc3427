"""Budget command: show the thinking budget for an effort level."""

import sys
from enum import Enum

import typer
from rich.console import Console

from prompt_converters.conversion.reasoning import (
    ReasoningEffort,
    calculate_claude_budget_tokens,
    calculate_google_budget_tokens,
)


class BudgetProvider(str, Enum):
    CLAUDE = "claude"
    GOOGLE = "google"


def budget(
    provider: BudgetProvider = typer.Argument(..., help="Provider family"),
    effort: ReasoningEffort = typer.Option(
        ReasoningEffort.MEDIUM, "--effort", "-e", help="Reasoning effort"
    ),
    max_tokens: int = typer.Option(..., "--max-tokens", help="Response token limit"),
    model: str = typer.Option("", "--model", "-m", help="Gemini model name"),
    stream: bool = typer.Option(False, "--stream", help="Streamed response (Claude)"),
) -> None:
    """Show the thinking budget a request would receive."""
    console = Console()

    if provider == BudgetProvider.CLAUDE:
        tokens = calculate_claude_budget_tokens(max_tokens, effort, stream)
    else:
        if not model:
            console.print("[red]❌ --model is required for google budgets[/red]")
            sys.exit(1)
        tokens = calculate_google_budget_tokens(max_tokens, effort, model)

    if tokens is None:
        console.print(f"[yellow]No thinking budget[/yellow] for {provider.value} ({effort.value})")
    elif tokens == -1:
        console.print(f"Thinking budget: [green]dynamic[/green] ({tokens})")
    else:
        console.print(f"Thinking budget: [green]{tokens}[/green] tokens")
