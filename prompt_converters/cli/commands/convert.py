"""Convert command: render a JSON message file for a provider."""

import json
import sys
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console

from prompt_converters.conversion.request_converter import convert_prompt
from prompt_converters.models.prompt_request import PromptRequest, TargetProvider


def load_messages(source: str) -> list[dict[str, Any]]:
    """Read messages from a JSON file, or stdin when ``source`` is ``-``.

    The document may be a message list or an object with a ``messages`` key.

    Raises:
        ValueError: If the document holds no message list.
    """
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    document = json.loads(raw)
    if isinstance(document, dict):
        document = document.get("messages")
    if not isinstance(document, list):
        raise ValueError("expected a JSON list of messages or an object with a 'messages' list")
    return document


def convert(
    messages_file: str = typer.Argument(..., help="JSON file with the messages ('-' for stdin)"),
    provider: TargetProvider = typer.Option(
        TargetProvider.OPENAI, "--provider", "-p", help="Target provider format"
    ),
    model: str = typer.Option("", "--model", "-m", help="Target model name"),
    processing_type: str = typer.Option(
        "", "--processing", help="Prompt post-processing (merge, semi, strict, single, ...)"
    ),
    char_name: str = typer.Option("", "--char-name", help="Character speaker name"),
    user_name: str = typer.Option("", "--user-name", help="User speaker name"),
    group_names: list[str] = typer.Option(
        [], "--group-name", help="Group member name (repeatable)"
    ),
    use_system_prompt: bool = typer.Option(
        False, "--system-prompt", help="Use the provider's system prompt field"
    ),
    prefill: str = typer.Option("", "--prefill", help="Assistant prefill text"),
    prefix_property: str = typer.Option(
        "", "--prefix-property", help="Continuation flag for a trailing assistant message"
    ),
    max_tokens: int = typer.Option(0, "--max-tokens", help="Response token limit"),
    reasoning_effort: str = typer.Option("", "--reasoning-effort", help="Reasoning effort"),
    stream: bool = typer.Option(False, "--stream", help="Budget for a streamed response"),
    caching_at_depth: int = typer.Option(
        None, "--caching-at-depth", help="Claude cache depth (defaults to configuration)"
    ),
) -> None:
    """Convert a generic message list into a provider payload."""
    console = Console()

    try:
        messages = load_messages(messages_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]❌ Could not read messages: {e}[/red]")
        sys.exit(1)

    try:
        request = PromptRequest(
            provider=provider,
            messages=messages,
            model=model,
            char_name=char_name,
            user_name=user_name,
            group_names=group_names,
            processing_type=processing_type,
            use_system_prompt=use_system_prompt,
            assistant_prefill=prefill,
            assistant_prefix_property=prefix_property or None,
            max_tokens=max_tokens,
            reasoning_effort=reasoning_effort or None,
            stream=stream,
            caching_at_depth=caching_at_depth,
        )
    except ValidationError as e:
        console.print(f"[red]❌ Invalid request: {e}[/red]")
        sys.exit(1)

    console.print_json(data=convert_prompt(request))
