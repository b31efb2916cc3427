"""Reasoning budget calculation.

Maps a qualitative reasoning effort onto the numeric thinking budget each
provider expects. The fractions, floors and ceilings below are provider
limits, not tuning knobs.
"""

import logging
import math
from enum import Enum

logger = logging.getLogger(__name__)


class ReasoningEffort(str, Enum):
    AUTO = "auto"
    MIN = "min"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    MAX = "max"


# Fraction of max_tokens granted per effort level
CLAUDE_EFFORT_FRACTIONS = {
    ReasoningEffort.LOW: 0.1,
    ReasoningEffort.MEDIUM: 0.25,
    ReasoningEffort.HIGH: 0.5,
    ReasoningEffort.MAX: 0.95,
}
GOOGLE_EFFORT_FRACTIONS = {
    ReasoningEffort.LOW: 0.1,
    ReasoningEffort.MEDIUM: 0.25,
    ReasoningEffort.HIGH: 0.5,
    ReasoningEffort.MAX: 1.0,
}

CLAUDE_MIN_BUDGET = 1024
CLAUDE_MAX_NON_STREAMING_BUDGET = 21333

GOOGLE_AUTO_BUDGET = -1
GOOGLE_FLASH_MAX_BUDGET = 24576
GOOGLE_FLASH_LITE_MIN_BUDGET = 512
GOOGLE_PRO_MIN_BUDGET = 128
GOOGLE_PRO_MAX_BUDGET = 32768


def resolve_reasoning_effort(value: ReasoningEffort | str | None) -> ReasoningEffort | None:
    """Coerce an effort tag; unknown tags resolve to None."""
    if isinstance(value, ReasoningEffort):
        return value
    try:
        return ReasoningEffort(value)
    except ValueError:
        return None


def _fraction_of(max_tokens: int, effort: ReasoningEffort | None, fractions: dict) -> int:
    fraction = fractions.get(effort)
    if fraction is None:
        return 0
    return math.floor(max_tokens * fraction)


def calculate_claude_budget_tokens(
    max_tokens: int, reasoning_effort: ReasoningEffort | str | None, stream: bool
) -> int | None:
    """Calculate the Claude thinking budget.

    Args:
        max_tokens: The request's max_tokens.
        reasoning_effort: Effort level. Unknown values fall back to the floor.
        stream: Whether the response is streamed.

    Returns:
        The budget in tokens, or None for ``auto``.
    """
    effort = resolve_reasoning_effort(reasoning_effort)
    if effort is ReasoningEffort.AUTO:
        return None

    if effort is ReasoningEffort.MIN:
        budget_tokens = CLAUDE_MIN_BUDGET
    else:
        budget_tokens = _fraction_of(max_tokens, effort, CLAUDE_EFFORT_FRACTIONS)

    budget_tokens = max(budget_tokens, CLAUDE_MIN_BUDGET)

    if not stream:
        budget_tokens = min(budget_tokens, CLAUDE_MAX_NON_STREAMING_BUDGET)

    return budget_tokens


def _google_flash_budget(max_tokens: int, effort: ReasoningEffort | None) -> int:
    if effort is ReasoningEffort.MIN:
        return 0
    return min(_fraction_of(max_tokens, effort, GOOGLE_EFFORT_FRACTIONS), GOOGLE_FLASH_MAX_BUDGET)


def _google_flash_lite_budget(max_tokens: int, effort: ReasoningEffort | None) -> int:
    if effort is ReasoningEffort.MIN:
        return 0
    budget_tokens = _fraction_of(max_tokens, effort, GOOGLE_EFFORT_FRACTIONS)
    return max(min(budget_tokens, GOOGLE_FLASH_MAX_BUDGET), GOOGLE_FLASH_LITE_MIN_BUDGET)


def _google_pro_budget(max_tokens: int, effort: ReasoningEffort | None) -> int:
    if effort is ReasoningEffort.MIN:
        budget_tokens = GOOGLE_PRO_MIN_BUDGET
    else:
        budget_tokens = _fraction_of(max_tokens, effort, GOOGLE_EFFORT_FRACTIONS)
    return max(min(budget_tokens, GOOGLE_PRO_MAX_BUDGET), GOOGLE_PRO_MIN_BUDGET)


def calculate_google_budget_tokens(
    max_tokens: int, reasoning_effort: ReasoningEffort | str | None, model: str
) -> int | None:
    """Calculate the Gemini thinking budget.

    The model family is detected from the model name: ``flash-lite`` is
    checked before ``flash``, then ``pro``.

    Returns:
        The budget in tokens, -1 for ``auto`` (dynamic thinking), or None
        when the model has no known thinking budget.
    """
    effort = resolve_reasoning_effort(reasoning_effort)

    if "flash-lite" in model:
        calculate = _google_flash_lite_budget
    elif "flash" in model:
        calculate = _google_flash_budget
    elif "pro" in model:
        calculate = _google_pro_budget
    else:
        logger.debug(f"No thinking budget rules for model {model!r}")
        return None

    if effort is ReasoningEffort.AUTO:
        return GOOGLE_AUTO_BUDGET
    return calculate(max_tokens, effort)
