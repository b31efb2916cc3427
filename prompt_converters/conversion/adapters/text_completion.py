"""Role-tagged text prompt for plain Text Completion APIs."""

from typing import Any

from prompt_converters.conversion.content_codec import content_to_text
from prompt_converters.core.constants import Constants


def convert_text_completion_prompt(messages: list[dict[str, Any]] | str) -> str:
    """Render messages as ``"<role or name>: <content>"`` lines ending with an assistant cue."""
    if isinstance(messages, str):
        return messages

    lines = []
    for message in messages:
        role = message.get("role")
        content = content_to_text(message.get("content"))
        if role == Constants.ROLE_SYSTEM and message.get("name") is None:
            lines.append(f"System: {content}")
        elif role == Constants.ROLE_SYSTEM:
            lines.append(f"{message['name']}: {content}")
        else:
            lines.append(f"{role}: {content}")
    return "\n".join(lines) + "\nassistant:"
