"""Post-processing transformer.

Applies the request's merge policy to the generic messages.
"""

import dataclasses

from prompt_converters.conversion.pipeline.base import ConversionContext, PromptTransformer
from prompt_converters.conversion.processing import post_process_prompt, resolve_processing_type


class PostProcessTransformer(PromptTransformer):
    """Runs the selected merge policy over the request messages."""

    def transform(self, context: ConversionContext) -> ConversionContext:
        processing_type = resolve_processing_type(context.request.processing_type)
        messages = post_process_prompt(context.messages, processing_type, context.names)
        metadata = {**context.metadata, "processing_type": processing_type.value}
        return dataclasses.replace(context, messages=messages, metadata=metadata)
