"""MistralAI chat converter."""

import copy
import hashlib
import logging
from typing import Any

from prompt_converters.conversion.content_codec import (
    PART_DELIMITER,
    as_content_parts,
    relabel_first_text,
)
from prompt_converters.conversion.names import PromptNames
from prompt_converters.core.config.accessors import mistral_enable_prefix
from prompt_converters.core.constants import Constants

logger = logging.getLogger(__name__)

TOOL_ID_LENGTH = 9


def sanitize_tool_id(tool_id: Any) -> str:
    """Map an arbitrary tool call ID onto the 9-character IDs Mistral accepts."""
    return hashlib.sha512(str(tool_id).encode("utf-8")).hexdigest()[:TOOL_ID_LENGTH]


def _append_content(target: dict[str, Any], extra: Any) -> None:
    if isinstance(target["content"], str) and isinstance(extra, str):
        target["content"] += f"{PART_DELIMITER}{extra}"
    else:
        target["content"] = as_content_parts(target["content"]) + as_content_parts(extra)


def _fold_user_after_tool(messages: list[dict[str, Any]]) -> None:
    """Move user turns that directly follow a tool result into the previous user turn.

    Repeats until no tool -> user adjacency with an earlier user turn remains.
    """
    rerun = True
    while rerun:
        rerun = False
        index = 0
        while index < len(messages) - 1:
            if (
                messages[index]["role"] == Constants.ROLE_TOOL
                and messages[index + 1]["role"] == Constants.ROLE_USER
            ):
                earlier_user = next(
                    (
                        j
                        for j in range(index - 1, -1, -1)
                        if messages[j]["role"] == Constants.ROLE_USER and messages[j].get("content")
                    ),
                    None,
                )
                if earlier_user is not None:
                    _append_content(messages[earlier_user], messages[index + 1].get("content"))
                    del messages[index + 1]
                    rerun = True
                    continue
            index += 1


def convert_mistral_messages(
    messages: Any, names: PromptNames, enable_prefix: bool | None = None
) -> list[dict[str, Any]]:
    """Convert generic messages to the MistralAI chat format.

    Args:
        messages: Generic chat messages.
        names: Speaker names for the conversation.
        enable_prefix: Mark a trailing assistant message as a ``prefix``
            continuation. Defaults to the MISTRAL_ENABLE_PREFIX config value.

    Returns:
        The converted message list.
    """
    if not isinstance(messages, list):
        return []
    messages = copy.deepcopy(messages)

    if enable_prefix is None:
        enable_prefix = mistral_enable_prefix()
    if enable_prefix and messages and messages[-1].get("role") == Constants.ROLE_ASSISTANT:
        messages[-1]["prefix"] = True

    for message in messages:
        role = message.get("role")
        if isinstance(message.get("tool_calls"), list):
            for tool_call in message["tool_calls"]:
                tool_call["id"] = sanitize_tool_id(tool_call.get("id"))
        if role == Constants.ROLE_TOOL and "tool_call_id" in message:
            message["tool_call_id"] = sanitize_tool_id(message["tool_call_id"])

        name = message.pop("name", None)
        if not name:
            continue
        content = message.get("content")
        if isinstance(content, str):
            message["content"] = names.label_turn(role, name, content)
        elif isinstance(content, list):
            message["content"] = relabel_first_text(
                content, lambda text: names.label_turn(role, name, text)
            )

    _fold_user_after_tool(messages)

    # Mistral rejects a system message right after an assistant message
    for index in range(len(messages) - 1):
        if (
            messages[index]["role"] == Constants.ROLE_ASSISTANT
            and messages[index + 1]["role"] == Constants.ROLE_SYSTEM
        ):
            messages[index + 1]["role"] = Constants.ROLE_USER

    logger.debug(f"Converted {len(messages)} messages for Mistral")
    return messages
