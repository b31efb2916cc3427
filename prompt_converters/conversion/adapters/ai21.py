"""AI21 converter: system message squash, user/assistant message merge."""

import copy
from typing import Any

from prompt_converters.conversion.content_codec import PART_DELIMITER, content_to_text
from prompt_converters.conversion.names import PromptNames, has_speaker_prefix
from prompt_converters.core.config.accessors import prompt_placeholder
from prompt_converters.core.constants import Constants


def convert_ai21_messages(messages: Any, names: PromptNames) -> list[dict[str, Any]]:
    """Convert generic messages to the AI21 chat format.

    Leading system messages are joined into a single system message, names
    are inlined as text, and adjacent same-role turns are concatenated.
    """
    if not isinstance(messages, list):
        return []
    messages = copy.deepcopy(messages)

    system_texts = []
    leading = 0
    while leading < len(messages) and messages[leading].get("role") == Constants.ROLE_SYSTEM:
        message = messages[leading]
        system_texts.append(
            names.label_example(message.get("name"), content_to_text(message.get("content")))
        )
        leading += 1
    messages = messages[leading:]

    if not messages:
        messages.append({"role": Constants.ROLE_USER, "content": prompt_placeholder()})

    system_prompt = PART_DELIMITER.join(system_texts).strip()
    if system_prompt:
        messages.insert(0, {"role": Constants.ROLE_SYSTEM, "content": system_prompt})

    merged: list[dict[str, Any]] = []
    for message in messages:
        message["content"] = content_to_text(message.get("content"))
        name = message.pop("name", None)
        if name and message["role"] != Constants.ROLE_SYSTEM:
            if not has_speaker_prefix(message["content"], name):
                message["content"] = f"{name}: {message['content']}"

        if merged and merged[-1]["role"] == message["role"]:
            merged[-1]["content"] += f"{PART_DELIMITER}{message['content']}"
        else:
            merged.append(message)

    return merged
