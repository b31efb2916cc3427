"""Prompt conversion pipeline.

Composes post-processing, provider formatting and the provider-specific
post-steps as a sequence of transformers over an immutable context.
"""

from prompt_converters.conversion.pipeline.base import (
    ConversionContext,
    PromptPipeline,
    PromptTransformer,
)
from prompt_converters.conversion.pipeline.factory import PromptPipelineFactory

__all__ = ["ConversionContext", "PromptPipeline", "PromptTransformer", "PromptPipelineFactory"]
