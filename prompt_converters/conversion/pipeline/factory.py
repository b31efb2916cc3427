"""Prompt pipeline factory.

Builds the conversion pipeline for a target provider.
"""

from prompt_converters.conversion.pipeline.base import PromptPipeline, PromptTransformer
from prompt_converters.conversion.pipeline.transformers.assistant_prefix import (
    AssistantPrefixTransformer,
)
from prompt_converters.conversion.pipeline.transformers.cache_control import (
    CacheControlTransformer,
)
from prompt_converters.conversion.pipeline.transformers.post_process import PostProcessTransformer
from prompt_converters.conversion.pipeline.transformers.provider_format import (
    ProviderFormatTransformer,
)
from prompt_converters.conversion.pipeline.transformers.reasoning_budget import (
    ReasoningBudgetTransformer,
)
from prompt_converters.models.prompt_request import TargetProvider


class PromptPipelineFactory:
    """Factory for creating prompt conversion pipelines."""

    @staticmethod
    def create_for(provider: TargetProvider | str) -> PromptPipeline:
        """Create the conversion pipeline for ``provider``.

        Transformers are executed in the following order:
        1. PostProcessTransformer - Apply the merge policy
        2. ProviderFormatTransformer - Render the provider payload
        3. AssistantPrefixTransformer - Continuation flag (OpenAI-compatible)
        4. CacheControlTransformer - Cache markers (Claude, OpenRouter)
        5. ReasoningBudgetTransformer - Thinking budget (Claude, Gemini)

        Returns:
            A configured PromptPipeline ready for execution.
        """
        provider = TargetProvider(provider)
        transformers: list[PromptTransformer] = [
            PostProcessTransformer(),
            ProviderFormatTransformer(),
        ]
        if provider in (TargetProvider.OPENAI, TargetProvider.OPENROUTER):
            transformers.append(AssistantPrefixTransformer())
        if provider in (TargetProvider.CLAUDE, TargetProvider.OPENROUTER):
            transformers.append(CacheControlTransformer())
        if provider in (TargetProvider.CLAUDE, TargetProvider.GOOGLE):
            transformers.append(ReasoningBudgetTransformer())
        return PromptPipeline(transformers)

    @staticmethod
    def create_custom(transformers: list[PromptTransformer]) -> PromptPipeline:
        """Create a custom pipeline with specified transformers."""
        return PromptPipeline(transformers)
