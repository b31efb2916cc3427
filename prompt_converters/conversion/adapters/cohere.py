"""Cohere chat history converter."""

import copy
from typing import Any

from prompt_converters.conversion.content_codec import content_to_text, relabel_first_text
from prompt_converters.conversion.names import PromptNames
from prompt_converters.core.config.accessors import prompt_placeholder
from prompt_converters.core.constants import Constants


def _tool_call_primer(tool_calls: list[dict[str, Any]]) -> str:
    called = ", ".join(str((tc or {}).get("function", {}).get("name")) for tc in tool_calls)
    return f"I'm going to call a tool for that: {called}"


def convert_cohere_messages(
    messages: list[dict[str, Any]], names: PromptNames
) -> dict[str, list[dict[str, Any]]]:
    """Convert generic messages to a Cohere chat history.

    Cohere needs an assistant primer for every tool call message: the content
    of the assistant turn right before it is folded into the tool call
    message, or a short stand-in sentence is written when there is none.
    Cohere has no ``name`` field, so speaker names are inlined as text; list
    content keeps its image parts and gets the label on its first text part.

    Returns:
        ``{"chat_history": [...]}``
    """
    messages = copy.deepcopy(messages)
    if not messages:
        messages.append({"role": Constants.ROLE_USER, "content": prompt_placeholder()})

    history: list[dict[str, Any]] = []
    for message in messages:
        if not isinstance(message.get("content"), list):
            message["content"] = content_to_text(message.get("content"))

        if isinstance(message.get("tool_calls"), list):
            if history and history[-1]["role"] == Constants.ROLE_ASSISTANT:
                message["content"] = history.pop()["content"]
            else:
                message["content"] = _tool_call_primer(message["tool_calls"])

        name = message.pop("name", None)
        if name:
            role = message["role"]
            if isinstance(message["content"], list):
                message["content"] = relabel_first_text(
                    message["content"], lambda text: names.label_turn(role, name, text)
                )
            else:
                message["content"] = names.label_turn(role, name, message["content"])

        history.append(message)

    return {"chat_history": history}
