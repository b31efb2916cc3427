"""Assistant prefix transformer.

Flags a trailing assistant message as a continuation for OpenAI-compatible
backends.
"""

import dataclasses

from prompt_converters.conversion.pipeline.base import ConversionContext, PromptTransformer
from prompt_converters.conversion.processing import add_assistant_prefix


class AssistantPrefixTransformer(PromptTransformer):
    """Sets ``assistant_prefix_property`` on a trailing assistant message.

    Skipped when the request names no property or the payload carries no
    ``messages`` list.
    """

    def transform(self, context: ConversionContext) -> ConversionContext:
        property_name = context.request.assistant_prefix_property
        messages = context.payload.get("messages")
        if not property_name or not isinstance(messages, list):
            return context

        new_payload = {
            **context.payload,
            "messages": add_assistant_prefix(messages, context.request.tools, property_name),
        }
        return dataclasses.replace(context, payload=new_payload)
