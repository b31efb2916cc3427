import logging
import uuid
from typing import Any

from prompt_converters.conversion.names import get_prompt_names
from prompt_converters.conversion.pipeline import (
    ConversionContext,
    PromptPipelineFactory,
)
from prompt_converters.core.config.accessors import log_conversion_metrics
from prompt_converters.core.constants import Constants
from prompt_converters.core.logging import ConversationLogger
from prompt_converters.models.prompt_request import PromptRequest

conversation_logger = ConversationLogger.get_logger()

logger = logging.getLogger(__name__)


def collect_request_metrics(request: PromptRequest) -> dict[str, Any]:
    """Summarize a request for the conversion metrics log line."""
    roles: dict[str, int] = {}
    media_parts = 0
    for message in request.messages:
        role = str(message.get("role"))
        roles[role] = roles.get(role, 0) + 1
        content = message.get("content")
        if isinstance(content, list):
            media_parts += sum(
                1
                for part in content
                if isinstance(part, dict) and part.get("type") != Constants.CONTENT_TEXT
            )

    return {
        "provider": request.provider.value,
        "model": request.model,
        "message_count": len(request.messages),
        "roles": roles,
        "media_parts": media_parts,
        "tool_count": len(request.tools),
    }


def log_request_metrics(
    log: logging.Logger, metrics: dict[str, Any], payload_metadata: dict[str, Any]
) -> None:
    roles = ", ".join(f"{role}={count}" for role, count in sorted(metrics["roles"].items()))
    extras = " ".join(f"{key}={value}" for key, value in sorted(payload_metadata.items()))
    log.info(
        f"Converted {metrics['message_count']} messages for {metrics['provider']} "
        f"(model={metrics['model'] or '-'}, roles: {roles or '-'}, "
        f"media={metrics['media_parts']}, tools={metrics['tool_count']}) {extras}".rstrip()
    )


def convert_prompt(request: PromptRequest) -> dict[str, Any]:
    """Convert a provider-agnostic prompt into a provider payload fragment.

    The request's messages are post-processed with its merge policy, rendered
    into the provider's wire shape, then decorated with the provider's
    extras (continuation flag, cache markers, thinking budget). The caller's
    messages are never mutated.

    Returns:
        The payload fields for ``request.provider``; see
        ProviderFormatTransformer for the keys each provider receives.
    """
    request_id = str(uuid.uuid4())

    with ConversationLogger.correlation_context(request_id):
        context = _build_initial_context(request, request_id)
        pipeline = PromptPipelineFactory.create_for(request.provider)
        result = pipeline.run(context)

        if log_conversion_metrics():
            metrics = collect_request_metrics(request)
            log_request_metrics(conversation_logger, metrics, result.metadata)

    return result.payload


def _build_initial_context(request: PromptRequest, request_id: str) -> ConversionContext:
    names = get_prompt_names(request.char_name, request.user_name, request.group_names)
    return ConversionContext(
        request=request,
        names=names,
        messages=request.messages,
        payload={},
        metadata={"request_id": request_id},
    )
