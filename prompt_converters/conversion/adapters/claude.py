"""Claude prompt converters.

Two wire formats are supported:
- the legacy Text Completions prompt (``\\n\\nHuman:`` / ``\\n\\nAssistant:``),
  mainly kept for token counting;
- the Messages API, with a separate system prompt and typed content blocks.
"""

import copy
import dataclasses
import logging
from typing import Any

from prompt_converters.conversion.content_codec import (
    as_content_parts,
    content_to_text,
    split_data_url,
)
from prompt_converters.conversion.json_utils import dumps_compact, try_parse
from prompt_converters.conversion.names import PromptNames, has_speaker_prefix
from prompt_converters.core.config.accessors import prompt_placeholder
from prompt_converters.core.constants import Constants

logger = logging.getLogger(__name__)

# Pseudo-role for a human turn that must not read as a second "Human:" turn
ROLE_FIX_HUMAN = "FixHumMsg"

HUMAN_PREFIX = "\n\nHuman: "
ASSISTANT_PREFIX = "\n\nAssistant: "


@dataclasses.dataclass(frozen=True)
class ClaudePrompt:
    """Messages API prompt.

    Attributes:
        messages: Alternating user/assistant messages with content blocks.
        system_prompt: Text blocks for the top-level ``system`` field.
    """

    messages: list[dict[str, Any]]
    system_prompt: list[dict[str, Any]]


def _find_first_assistant(messages: list[dict[str, Any]]) -> tuple[int, bool]:
    """Locate the first non-leading assistant turn.

    Returns:
        The index (or -1) and whether a human turn was seen up to that index.
    """
    has_user = False
    for index, message in enumerate(messages):
        if message["role"] == Constants.ROLE_USER or HUMAN_PREFIX in message["content"]:
            has_user = True
        if message["role"] == Constants.ROLE_ASSISTANT and index > 0:
            return index, has_user
    return -1, has_user


def _turn_prefix(index: int, message: dict[str, Any], exclude_prefixes: bool) -> str:
    role = message["role"]
    name = message.get("name")
    if role == Constants.ROLE_ASSISTANT:
        return ASSISTANT_PREFIX
    if role == Constants.ROLE_USER:
        return HUMAN_PREFIX
    if role == ROLE_FIX_HUMAN:
        return "\n\nFirst message: "
    if role == Constants.ROLE_SYSTEM:
        if index == 0:
            return ""
        if name == Constants.NAME_EXAMPLE_ASSISTANT:
            return "\n\nA: "
        if name == Constants.NAME_EXAMPLE_USER:
            return "\n\nH: "
        if exclude_prefixes and name:
            return f"\n\n{name}: "
        return "\n\n"
    return ""


def convert_claude_prompt(
    messages: list[dict[str, Any]],
    add_assistant_postfix: bool = False,
    assistant_prefill: str = "",
    with_sys_prompt_support: bool = False,
    use_system_prompt: bool = False,
    add_sys_human_msg: str = "",
    exclude_prefixes: bool = False,
) -> str:
    """Convert generic messages to a legacy Claude text prompt.

    Args:
        messages: Generic chat messages.
        add_assistant_postfix: Append a final ``Assistant:`` turn.
        assistant_prefill: Text placed after the final ``Assistant:`` marker.
            Trailing whitespace is stripped.
        with_sys_prompt_support: The model accepts a leading system prompt.
        use_system_prompt: Render the first message as a system prompt.
        add_sys_human_msg: Human turn inserted before the first assistant turn
            in system prompt mode when no human turn precedes it.
        exclude_prefixes: Render every message but the last without
            ``Human:``/``Assistant:`` markers, labelling named turns instead.

    Returns:
        The prompt string.
    """
    messages = copy.deepcopy(messages)

    if messages:
        for message in messages:
            message["content"] = content_to_text(message.get("content"))
            if message.get("tool_calls"):
                message["content"] += dumps_compact(message["tool_calls"])

        if exclude_prefixes:
            for message in messages[:-1]:
                message["role"] = Constants.ROLE_SYSTEM
        else:
            messages[0]["role"] = Constants.ROLE_SYSTEM

        if add_assistant_postfix:
            messages.append(
                {"role": Constants.ROLE_ASSISTANT, "content": (assistant_prefill or "").rstrip()}
            )

        first_assistant_index, has_user = _find_first_assistant(messages)

        if with_sys_prompt_support and use_system_prompt:
            messages[0]["role"] = Constants.ROLE_SYSTEM
            if first_assistant_index > 0 and add_sys_human_msg and not has_user:
                messages.insert(
                    first_assistant_index,
                    {"role": Constants.ROLE_USER, "content": add_sys_human_msg},
                )
        else:
            messages[0]["role"] = Constants.ROLE_USER
            # Two consecutive human turns before the first reply: relabel the second one
            if first_assistant_index > 1 and not exclude_prefixes:
                before = messages[first_assistant_index - 1]
                if before["role"] == Constants.ROLE_USER:
                    before["role"] = ROLE_FIX_HUMAN

    turns = []
    for index, message in enumerate(messages):
        name = message.get("name")
        speaker = f"{name}: " if name and message["role"] != Constants.ROLE_SYSTEM else ""
        turns.append(
            f"{_turn_prefix(index, message, exclude_prefixes)}{speaker}{message['content']}"
        )
    return "".join(turns)


def _to_claude_block(part: dict[str, Any], name: str | None) -> dict[str, Any]:
    part_type = part.get("type") if isinstance(part, dict) else None

    if part_type == Constants.CONTENT_IMAGE_URL:
        url = (part.get("image_url") or {}).get("url") or ""
        media_type, data = split_data_url(url)
        return {
            "type": Constants.CONTENT_IMAGE,
            "source": {"type": "base64", "media_type": media_type, "data": data},
        }

    if part_type == Constants.CONTENT_TEXT:
        text = str(part.get("text") or "")
        if name and not has_speaker_prefix(text, name):
            text = f"{name}: {text}"
        return {"type": Constants.CONTENT_TEXT, "text": text or Constants.ZERO_WIDTH_SPACE}

    return part


def _to_claude_message(message: dict[str, Any], names: PromptNames) -> dict[str, Any]:
    role = message.get("role")
    name = message.get("name")
    content = message.get("content")
    if content is None:
        content = ""

    if role == Constants.ROLE_ASSISTANT and message.get("tool_calls"):
        tool_uses = [
            {
                "type": Constants.CONTENT_TOOL_USE,
                "id": tool_call.get("id"),
                "name": tool_call.get("function", {}).get("name"),
                "input": try_parse(tool_call.get("function", {}).get("arguments")),
            }
            for tool_call in message["tool_calls"]
        ]
        # Text spoken alongside the tool calls is kept ahead of them
        content = (as_content_parts(content) if content_to_text(content) else []) + tool_uses

    if role == Constants.ROLE_TOOL:
        role = Constants.ROLE_USER
        if isinstance(content, list):
            content = [_to_claude_block(part, None) for part in content]
        content = [
            {
                "type": Constants.CONTENT_TOOL_RESULT,
                "tool_use_id": message.get("tool_call_id"),
                "content": content,
            }
        ]

    if role == Constants.ROLE_SYSTEM:
        if isinstance(content, str):
            content = names.label_example(name, content)
        role = Constants.ROLE_USER
        name = None

    if isinstance(content, str):
        if name and not has_speaker_prefix(content, name):
            content = f"{name}: {content}"
        blocks = [{"type": Constants.CONTENT_TEXT, "text": content}]
    else:
        blocks = [_to_claude_block(part, name) for part in content]

    return {"role": role, "content": blocks}


def _move_assistant_images(messages: list[dict[str, Any]]) -> None:
    """Move image blocks off assistant turns onto the next user turn."""
    index = 0
    while index < len(messages):
        message = messages[index]
        images = [b for b in message["content"] if b.get("type") == Constants.CONTENT_IMAGE]
        if message["role"] == Constants.ROLE_ASSISTANT and images:
            message["content"] = [
                b for b in message["content"] if b.get("type") != Constants.CONTENT_IMAGE
            ]
            target = next(
                (
                    j
                    for j in range(index + 1, len(messages))
                    if messages[j]["role"] == Constants.ROLE_USER
                ),
                None,
            )
            if target is None:
                target = index + 1
                messages.insert(target, {"role": Constants.ROLE_USER, "content": []})
            messages[target]["content"].extend(images)
            logger.debug(f"Moved {len(images)} image(s) from assistant turn {index}")
        index += 1


def _tool_block_as_text(block: dict[str, Any]) -> dict[str, Any]:
    if block.get("type") == Constants.CONTENT_TOOL_USE:
        return {"type": Constants.CONTENT_TEXT, "text": dumps_compact(block.get("input"))}
    if block.get("type") == Constants.CONTENT_TOOL_RESULT:
        return {"type": Constants.CONTENT_TEXT, "text": content_to_text(block.get("content"))}
    return block


def convert_claude_messages(
    messages: list[dict[str, Any]],
    prefill: str,
    use_sys_prompt: bool,
    use_tools: bool,
    names: PromptNames,
) -> ClaudePrompt:
    """Convert generic messages to the Claude Messages API format.

    Args:
        messages: Generic chat messages.
        prefill: Assistant prefill appended as the final turn (if non-empty).
        use_sys_prompt: Move leading system messages into the system prompt.
        use_tools: Keep tool_use / tool_result blocks. When False they are
            rendered as plain text.
        names: Speaker names for the conversation.

    Returns:
        A ClaudePrompt with strictly alternating messages.
    """
    messages = copy.deepcopy(messages)
    system_prompt: list[dict[str, Any]] = []

    if use_sys_prompt:
        leading = 0
        while leading < len(messages) and messages[leading].get("role") == Constants.ROLE_SYSTEM:
            message = messages[leading]
            text = names.label_example(message.get("name"), content_to_text(message.get("content")))
            system_prompt.append({"type": Constants.CONTENT_TEXT, "text": text})
            leading += 1
        messages = messages[leading:]

        if not messages:
            messages.append({"role": Constants.ROLE_USER, "content": prompt_placeholder()})

    converted = [_to_claude_message(message, names) for message in messages]
    _move_assistant_images(converted)

    prefill_text = (prefill or "").rstrip()
    if prefill_text:
        # Dangling whitespace is not allowed for prefilling
        converted.append(
            {
                "role": Constants.ROLE_ASSISTANT,
                "content": [{"type": Constants.CONTENT_TEXT, "text": prefill_text}],
            }
        )

    merged: list[dict[str, Any]] = []
    for message in converted:
        if merged and merged[-1]["role"] == message["role"]:
            merged[-1]["content"].extend(message["content"])
        else:
            merged.append(message)

    if not use_tools:
        for message in merged:
            message["content"] = [_tool_block_as_text(block) for block in message["content"]]

    return ClaudePrompt(messages=merged, system_prompt=system_prompt)
