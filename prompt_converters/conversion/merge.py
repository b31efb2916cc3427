"""Merging of consecutive same-role messages.

Most chat completion backends reject prompts that break role alternation,
carry several system messages, or use the ``name`` field. ``merge_messages``
rewrites a generic message list into a shape that satisfies a MergePolicy:

1. Normalize every message: flatten multimodal content to text, inline
   speaker names as text prefixes, demote or keep tool turns.
2. Squash adjacent messages that share a role.
3. Guarantee at least one message.
4. Restore non-text content parts from their tokens.
5. In strict mode, allow a single leading system message, optionally insert
   placeholder user turns, and re-run the merge once to squash again.
"""

import copy
import dataclasses
import logging
from typing import Any

from prompt_converters.conversion.content_codec import (
    PART_DELIMITER,
    TokenMap,
    contains_token,
    expand_content,
    flatten_content,
    prepend_speaker,
)
from prompt_converters.conversion.names import PromptNames, has_speaker_prefix
from prompt_converters.core.config.accessors import prompt_placeholder
from prompt_converters.core.constants import Constants

logger = logging.getLogger(__name__)

Message = dict[str, Any]


@dataclasses.dataclass(frozen=True)
class MergePolicy:
    """Structural constraints applied by ``merge_messages``.

    Attributes:
        strict: Allow only one system message, at the start of the prompt.
        placeholders: Insert placeholder user turns where strict alternation
            would otherwise break (only meaningful with ``strict``).
        single: Collapse the whole conversation into a single user turn.
        tools: Keep tool messages and tool call metadata instead of turning
            them into plain user text.
    """

    strict: bool = False
    placeholders: bool = False
    single: bool = False
    tools: bool = False


def _normalize_message(
    message: Message, names: PromptNames, policy: MergePolicy, tokens: TokenMap
) -> Message:
    normalized = dict(message)
    role = normalized.get("role")
    name = normalized.pop("name", None)
    content = flatten_content(normalized.get("content") or "", tokens)

    if role == Constants.ROLE_SYSTEM and name == Constants.NAME_EXAMPLE_ASSISTANT:
        if names.should_prefix_char(content):
            content = prepend_speaker(content, names.char_name, tokens)
    if role == Constants.ROLE_SYSTEM and name == Constants.NAME_EXAMPLE_USER:
        if names.should_prefix_user(content):
            content = prepend_speaker(content, names.user_name, tokens)
    if name and role != Constants.ROLE_SYSTEM:
        if not has_speaker_prefix(content, str(name)):
            content = prepend_speaker(content, str(name), tokens)

    if role == Constants.ROLE_TOOL and not policy.tools:
        role = Constants.ROLE_USER

    if policy.single:
        if role == Constants.ROLE_ASSISTANT and names.should_prefix_char(content):
            content = prepend_speaker(content, names.char_name, tokens)
        if role == Constants.ROLE_USER and names.should_prefix_user(content):
            content = prepend_speaker(content, names.user_name, tokens)
        role = Constants.ROLE_USER

    if not policy.tools:
        normalized.pop("tool_calls", None)
        normalized.pop("tool_call_id", None)

    normalized["role"] = role
    normalized["content"] = content
    return normalized


def _squash(messages: list[Message]) -> list[Message]:
    merged: list[Message] = []
    for message in messages:
        if (
            merged
            and merged[-1]["role"] == message["role"]
            and message["content"]
            and message["role"] != Constants.ROLE_TOOL
        ):
            merged[-1]["content"] += f"{PART_DELIMITER}{message['content']}"
        else:
            merged.append(message)
    return merged


def _restore_parts(message: Message, tokens: TokenMap) -> Message:
    if not contains_token(message["content"], tokens):
        return message
    return {**message, "content": expand_content(message["content"], tokens)}


def merge_messages(
    messages: list[Message],
    names: PromptNames,
    policy: MergePolicy | None = None,
    *,
    placeholder: str | None = None,
) -> list[Message]:
    """Merge consecutive same-role messages and inline speaker names.

    The input list is not modified; a new list is returned.

    Args:
        messages: Generic chat messages.
        names: Speaker names for the conversation.
        policy: Structural constraints to enforce. Defaults to a plain merge.
        placeholder: Filler user text. Defaults to the PROMPT_PLACEHOLDER
            config value.

    Returns:
        A non-empty list of merged messages.
    """
    policy = policy or MergePolicy()
    if placeholder is None:
        placeholder = prompt_placeholder()

    tokens: TokenMap = {}
    normalized = [
        _normalize_message(message, names, policy, tokens) for message in copy.deepcopy(messages)
    ]
    merged = _squash(normalized)

    if not merged:
        merged.append({"role": Constants.ROLE_USER, "content": placeholder})

    if tokens:
        merged = [_restore_parts(message, tokens) for message in merged]

    if not policy.strict:
        return merged

    for index, message in enumerate(merged):
        # Force mid-prompt system messages to be user messages
        if index > 0 and message["role"] == Constants.ROLE_SYSTEM:
            message["role"] = Constants.ROLE_USER

    if policy.placeholders:
        first_role = merged[0]["role"]
        if first_role == Constants.ROLE_SYSTEM and (
            len(merged) == 1 or merged[1]["role"] != Constants.ROLE_USER
        ):
            merged.insert(1, {"role": Constants.ROLE_USER, "content": placeholder})
        elif first_role not in (Constants.ROLE_SYSTEM, Constants.ROLE_USER):
            merged.insert(0, {"role": Constants.ROLE_USER, "content": placeholder})

    logger.debug(f"Strict pass produced {len(merged)} messages, re-squashing")
    relaxed = dataclasses.replace(policy, strict=False, single=False)
    return merge_messages(merged, names, relaxed, placeholder=placeholder)
