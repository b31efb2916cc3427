"""Provider format transformer.

Renders the post-processed messages into the provider's wire shape.
"""

import dataclasses
from typing import Any

from prompt_converters.conversion.adapters import (
    convert_ai21_messages,
    convert_claude_messages,
    convert_claude_prompt,
    convert_cohere_messages,
    convert_google_prompt,
    convert_mistral_messages,
    convert_text_completion_prompt,
    convert_xai_messages,
)
from prompt_converters.conversion.pipeline.base import ConversionContext, PromptTransformer
from prompt_converters.core.constants import Constants
from prompt_converters.models.prompt_request import TargetProvider


def convert_claude_tools(tools: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Convert OpenAI function tools to Claude tool definitions.

    Tools without a function name are dropped.
    """
    claude_tools = []
    for tool in tools:
        function = tool.get(Constants.TOOL_FUNCTION) or {}
        name = function.get("name")
        if not name or not str(name).strip():
            continue
        claude_tools.append(
            {
                "name": name,
                "description": function.get("description") or "",
                "input_schema": function.get("parameters") or {"type": "object", "properties": {}},
            }
        )
    return claude_tools


class ProviderFormatTransformer(PromptTransformer):
    """Converts generic messages into the target provider's payload fields.

    Payload keys per provider:
    - openai, openrouter, ai21, mistral, xai: ``messages``
    - claude: ``messages`` plus ``system`` and ``tools`` when used
    - claude_text, text_completion: ``prompt``
    - cohere: ``chat_history``
    - google: ``contents`` plus ``system_instruction`` when used
    """

    def transform(self, context: ConversionContext) -> ConversionContext:
        request = context.request
        names = context.names
        messages = context.messages
        payload = context.payload.copy()
        provider = request.provider

        if provider in (TargetProvider.OPENAI, TargetProvider.OPENROUTER):
            payload["messages"] = messages
        elif provider == TargetProvider.CLAUDE:
            use_tools = bool(request.tools)
            prompt = convert_claude_messages(
                messages,
                request.assistant_prefill,
                request.use_system_prompt,
                use_tools,
                names,
            )
            payload["messages"] = prompt.messages
            if prompt.system_prompt:
                payload["system"] = prompt.system_prompt
            if use_tools:
                claude_tools = convert_claude_tools(request.tools)
                if claude_tools:
                    payload["tools"] = claude_tools
        elif provider == TargetProvider.CLAUDE_TEXT:
            payload["prompt"] = convert_claude_prompt(
                messages,
                add_assistant_postfix=request.add_assistant_postfix,
                assistant_prefill=request.assistant_prefill,
                with_sys_prompt_support=request.with_sys_prompt_support,
                use_system_prompt=request.use_system_prompt,
                add_sys_human_msg=request.human_sys_prompt,
                exclude_prefixes=request.exclude_prefixes,
            )
        elif provider == TargetProvider.COHERE:
            payload.update(convert_cohere_messages(messages, names))
        elif provider == TargetProvider.GOOGLE:
            google_prompt = convert_google_prompt(
                messages, request.model, request.use_system_prompt, names
            )
            payload["contents"] = google_prompt["contents"]
            if google_prompt["system_instruction"]["parts"]:
                payload["system_instruction"] = google_prompt["system_instruction"]
        elif provider == TargetProvider.AI21:
            payload["messages"] = convert_ai21_messages(messages, names)
        elif provider == TargetProvider.MISTRAL:
            payload["messages"] = convert_mistral_messages(messages, names)
        elif provider == TargetProvider.XAI:
            payload["messages"] = convert_xai_messages(messages, names)
        elif provider == TargetProvider.TEXT_COMPLETION:
            payload["prompt"] = convert_text_completion_prompt(messages)

        return dataclasses.replace(context, payload=payload)
