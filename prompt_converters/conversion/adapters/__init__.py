"""Provider-specific prompt converters.

Each converter takes generic chat messages (usually already post-processed
by a merge policy) and returns the shape one provider family expects.
"""

from prompt_converters.conversion.adapters.ai21 import convert_ai21_messages
from prompt_converters.conversion.adapters.claude import (
    ClaudePrompt,
    convert_claude_messages,
    convert_claude_prompt,
)
from prompt_converters.conversion.adapters.cohere import convert_cohere_messages
from prompt_converters.conversion.adapters.google import convert_google_prompt
from prompt_converters.conversion.adapters.mistral import convert_mistral_messages
from prompt_converters.conversion.adapters.text_completion import convert_text_completion_prompt
from prompt_converters.conversion.adapters.xai import convert_xai_messages

__all__ = [
    "ClaudePrompt",
    "convert_ai21_messages",
    "convert_claude_messages",
    "convert_claude_prompt",
    "convert_cohere_messages",
    "convert_google_prompt",
    "convert_mistral_messages",
    "convert_text_completion_prompt",
    "convert_xai_messages",
]
