"""Claude prompt caching markers.

Depth is measured in role switches counted from the end of the
conversation, not in messages. A trailing assistant prefill is skipped
and never marked. Markers go on the last content block of the message
where the switch to depth ``n`` happens, and again at ``n + 2``, which is
the same speaker one full exchange earlier.
"""

import copy
import logging
from collections.abc import Iterator
from typing import Any

from prompt_converters.core.constants import Constants
from prompt_converters.core.exceptions import PromptContractError

logger = logging.getLogger(__name__)


def cache_ttl(extended: bool) -> str:
    """Return the cache TTL string for the standard or extended cache lifetime."""
    return Constants.CACHE_TTL_EXTENDED if extended else Constants.CACHE_TTL_DEFAULT


def cache_control(ttl: str) -> dict[str, str]:
    return {"type": Constants.CACHE_EPHEMERAL, "ttl": ttl}


def mark_last_block(blocks: list[dict[str, Any]], ttl: str) -> list[dict[str, Any]]:
    """Return a copy of ``blocks`` with cache_control set on the last block.

    Used for the Claude system prompt and tool definitions.
    """
    blocks = copy.deepcopy(blocks)
    if blocks:
        blocks[-1]["cache_control"] = cache_control(ttl)
    return blocks


def _cache_targets(messages: list[dict[str, Any]], caching_at_depth: int) -> Iterator[int]:
    """Yield the indices of the messages that receive a cache marker."""
    passed_the_prefill = False
    depth = 0
    previous_role = None

    for index in range(len(messages) - 1, -1, -1):
        role = messages[index].get("role")
        if not passed_the_prefill and role == Constants.ROLE_ASSISTANT:
            continue
        passed_the_prefill = True

        if role == previous_role:
            continue

        if depth in (caching_at_depth, caching_at_depth + 2):
            yield index
        if depth == caching_at_depth + 2:
            return

        depth += 1
        previous_role = role


def caching_at_depth_for_claude(
    messages: list[dict[str, Any]], caching_at_depth: int, ttl: str
) -> list[dict[str, Any]]:
    """Add cache_control markers to Claude Messages API messages.

    Args:
        messages: Messages whose content is already a list of content blocks.
        caching_at_depth: Role-switch depth to cache at. Negative disables.
        ttl: Cache TTL ("5m" or "1h").

    Returns:
        A marked copy of ``messages``.

    Raises:
        PromptContractError: If a message to be marked has string content.
    """
    messages = copy.deepcopy(messages)
    if caching_at_depth < 0:
        return messages

    for index in _cache_targets(messages, caching_at_depth):
        content = messages[index].get("content")
        if not isinstance(content, list):
            raise PromptContractError(
                "caching_at_depth_for_claude",
                f"message {index} content must be a list of content blocks "
                f"(got {type(content).__name__})",
            )
        if not content:
            logger.debug(f"Message {index} has no content blocks to cache")
            continue
        content[-1]["cache_control"] = cache_control(ttl)

    return messages


def caching_at_depth_for_openrouter_claude(
    messages: list[dict[str, Any]], caching_at_depth: int, ttl: str
) -> list[dict[str, Any]]:
    """Add cache_control markers to OpenAI-style messages bound for Claude on OpenRouter.

    String content is wrapped into a single text block before marking.

    Returns:
        A marked copy of ``messages``.
    """
    messages = copy.deepcopy(messages)
    if caching_at_depth < 0:
        return messages

    for index in _cache_targets(messages, caching_at_depth):
        content = messages[index].get("content")
        if isinstance(content, list) and content:
            content[-1]["cache_control"] = cache_control(ttl)
        else:
            text = content if isinstance(content, str) else ""
            messages[index]["content"] = [
                {"type": Constants.CONTENT_TEXT, "text": text, "cache_control": cache_control(ttl)}
            ]

    return messages
