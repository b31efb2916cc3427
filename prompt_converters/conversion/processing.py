"""Prompt post-processing dispatch.

Maps a processing type, as selected per backend, to the merge policy that
backend needs.
"""

import copy
import logging
from enum import Enum
from typing import Any

from prompt_converters.conversion.merge import Message, MergePolicy, merge_messages
from prompt_converters.conversion.names import PromptNames
from prompt_converters.core.constants import Constants

logger = logging.getLogger(__name__)


class PromptProcessingType(str, Enum):
    """Post-processing applied to a prompt before it is sent."""

    NONE = ""
    # Deprecated alias of MERGE, kept for older clients
    CLAUDE = "claude"
    MERGE = "merge"
    MERGE_TOOLS = "merge_tools"
    SEMI = "semi"
    SEMI_TOOLS = "semi_tools"
    STRICT = "strict"
    STRICT_TOOLS = "strict_tools"
    SINGLE = "single"


MERGE_POLICIES: dict[PromptProcessingType, MergePolicy] = {
    PromptProcessingType.MERGE: MergePolicy(),
    PromptProcessingType.CLAUDE: MergePolicy(),
    PromptProcessingType.MERGE_TOOLS: MergePolicy(tools=True),
    PromptProcessingType.SEMI: MergePolicy(strict=True),
    PromptProcessingType.SEMI_TOOLS: MergePolicy(strict=True, tools=True),
    PromptProcessingType.STRICT: MergePolicy(strict=True, placeholders=True),
    PromptProcessingType.STRICT_TOOLS: MergePolicy(strict=True, placeholders=True, tools=True),
    PromptProcessingType.SINGLE: MergePolicy(strict=True, single=True),
}


def resolve_processing_type(value: PromptProcessingType | str | None) -> PromptProcessingType:
    """Coerce a processing type tag, treating unknown tags as NONE."""
    if isinstance(value, PromptProcessingType):
        return value
    try:
        return PromptProcessingType(value or "")
    except ValueError:
        logger.warning(f"Unknown prompt processing type {value!r}, leaving prompt unchanged")
        return PromptProcessingType.NONE


def post_process_prompt(
    messages: list[Message],
    processing_type: PromptProcessingType | str | None,
    names: PromptNames,
) -> list[Message]:
    """Apply the merge policy selected by ``processing_type``.

    Args:
        messages: Generic chat messages.
        processing_type: A PromptProcessingType or its string tag.
        names: Speaker names for the conversation.

    Returns:
        The post-processed messages. For NONE (and unknown tags) this is an
        unmodified copy of the input.
    """
    policy = MERGE_POLICIES.get(resolve_processing_type(processing_type))
    if policy is None:
        return copy.deepcopy(messages)
    return merge_messages(messages, names, policy)


def add_assistant_prefix(
    messages: list[Message], tools: list[Any] | None, property_name: str
) -> list[Message]:
    """Flag a trailing assistant message as a continuation prefix.

    Some OpenAI-compatible backends continue a final assistant message when
    it carries a flag such as ``prefix`` or ``partial``. The flag is only set
    when the prompt involves no tools, as those backends reject prefixes
    combined with tool use.
    """
    messages = copy.deepcopy(messages)
    if not messages:
        return messages

    has_any_tools = bool(tools) or any(m.get("role") == Constants.ROLE_TOOL for m in messages)
    if not has_any_tools and messages[-1].get("role") == Constants.ROLE_ASSISTANT:
        messages[-1][property_name] = True
    return messages
