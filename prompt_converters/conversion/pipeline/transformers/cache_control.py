"""Cache control transformer.

Adds Claude prompt caching markers, natively or through OpenRouter.
"""

import dataclasses

from prompt_converters.conversion.caching import (
    caching_at_depth_for_claude,
    caching_at_depth_for_openrouter_claude,
    mark_last_block,
)
from prompt_converters.conversion.pipeline.base import ConversionContext, PromptTransformer
from prompt_converters.core.config.accessors import (
    cache_ttl,
    caching_at_depth,
    system_prompt_cache,
)
from prompt_converters.models.prompt_request import TargetProvider


class CacheControlTransformer(PromptTransformer):
    """Marks cache breakpoints on Claude payloads.

    The depth comes from the request, falling back to CLAUDE_CACHING_AT_DEPTH.
    For native Claude payloads the system prompt and tool definitions are
    also marked when CLAUDE_ENABLE_SYSTEM_PROMPT_CACHE is set. OpenRouter
    payloads are only marked for Claude models.
    """

    def transform(self, context: ConversionContext) -> ConversionContext:
        request = context.request
        depth = request.caching_at_depth
        if depth is None:
            depth = caching_at_depth()
        ttl = cache_ttl()
        payload = context.payload.copy()

        if request.provider == TargetProvider.CLAUDE:
            payload["messages"] = caching_at_depth_for_claude(payload["messages"], depth, ttl)
            if system_prompt_cache():
                if payload.get("system"):
                    payload["system"] = mark_last_block(payload["system"], ttl)
                if payload.get("tools"):
                    payload["tools"] = mark_last_block(payload["tools"], ttl)
        elif request.provider == TargetProvider.OPENROUTER and "claude" in request.model:
            payload["messages"] = caching_at_depth_for_openrouter_claude(
                payload["messages"], depth, ttl
            )
        else:
            return context

        metadata = {**context.metadata, "caching_at_depth": depth, "cache_ttl": ttl}
        return dataclasses.replace(context, payload=payload, metadata=metadata)
