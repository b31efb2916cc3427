"""Reasoning budget transformer.

Translates the request's reasoning effort into a provider thinking budget.
"""

import dataclasses

from prompt_converters.conversion.pipeline.base import ConversionContext, PromptTransformer
from prompt_converters.conversion.reasoning import (
    calculate_claude_budget_tokens,
    calculate_google_budget_tokens,
)
from prompt_converters.models.prompt_request import TargetProvider


class ReasoningBudgetTransformer(PromptTransformer):
    """Adds ``thinking`` (Claude) or ``generationConfig.thinkingConfig`` (Gemini).

    Nothing is added when the request has no reasoning effort or the
    calculator returns no budget.
    """

    def transform(self, context: ConversionContext) -> ConversionContext:
        request = context.request
        if not request.reasoning_effort:
            return context

        payload = context.payload.copy()
        if request.provider == TargetProvider.CLAUDE:
            budget = calculate_claude_budget_tokens(
                request.max_tokens, request.reasoning_effort, request.stream
            )
            if budget is None:
                return context
            payload["thinking"] = {"type": "enabled", "budget_tokens": budget}
        elif request.provider == TargetProvider.GOOGLE:
            budget = calculate_google_budget_tokens(
                request.max_tokens, request.reasoning_effort, request.model
            )
            if budget is None:
                return context
            generation_config = dict(payload.get("generationConfig") or {})
            generation_config["thinkingConfig"] = {"thinkingBudget": budget}
            payload["generationConfig"] = generation_config
        else:
            return context

        metadata = {**context.metadata, "thinking_budget": budget}
        return dataclasses.replace(context, payload=payload, metadata=metadata)
