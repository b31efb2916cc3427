"""xAI converter: speaker names only, no structural changes."""

import copy
from typing import Any

from prompt_converters.conversion.content_codec import relabel_first_text
from prompt_converters.conversion.names import PromptNames
from prompt_converters.core.constants import Constants


def _label(role: str, name: str, text: str, names: PromptNames) -> str:
    if role == Constants.ROLE_ASSISTANT or (
        role == Constants.ROLE_SYSTEM and name == Constants.NAME_EXAMPLE_ASSISTANT
    ):
        if names.should_prefix_char(text):
            return f"{names.char_name}: {text}"
    elif role == Constants.ROLE_SYSTEM and name == Constants.NAME_EXAMPLE_USER:
        if names.should_prefix_user(text):
            return f"{names.user_name}: {text}"
    return text


def convert_xai_messages(messages: Any, names: PromptNames) -> list[dict[str, Any]]:
    """Inline speaker names for xAI.

    Named assistant turns and example assistant turns get the character name
    prefix; example user turns get the user name prefix. For list content the
    prefix goes on the first text part. The ``name`` field is then dropped
    from every message except user messages, which xAI accepts as-is.
    """
    if not isinstance(messages, list):
        return []
    messages = copy.deepcopy(messages)

    for message in messages:
        role = message.get("role")
        name = message.get("name")
        if not name or role == Constants.ROLE_USER:
            continue

        content = message.get("content")
        if isinstance(content, str):
            message["content"] = _label(role, name, content, names)
        elif isinstance(content, list):
            message["content"] = relabel_first_text(
                content, lambda text: _label(role, name, text, names)
            )

        del message["name"]

    return messages
