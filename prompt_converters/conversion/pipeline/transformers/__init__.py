"""Prompt conversion transformers.

Each transformer handles a single, focused transformation of the prompt.
Transformers are executed in sequence by the PromptPipeline.
"""

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

__all__ = [
    "PostProcessTransformer",
    "ProviderFormatTransformer",
    "AssistantPrefixTransformer",
    "CacheControlTransformer",
    "ReasoningBudgetTransformer",
]
