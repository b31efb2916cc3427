import hashlib

import pytest

from prompt_converters.conversion.adapters.ai21 import convert_ai21_messages
from prompt_converters.conversion.adapters.mistral import (
    convert_mistral_messages,
    sanitize_tool_id,
)
from prompt_converters.conversion.adapters.text_completion import convert_text_completion_prompt
from prompt_converters.conversion.adapters.xai import convert_xai_messages

IMAGE_PART = {"type": "image_url", "image_url": {"url": "data:image/png;base64,AA"}}


@pytest.mark.unit
class TestConvertAi21Messages:
    def test_system_squash_and_merge(self, names):
        messages = [
            {"role": "system", "content": "rules"},
            {"role": "system", "name": "example_user", "content": "q"},
            {"role": "user", "content": "hi"},
            {"role": "user", "name": "Dave", "content": "there"},
            {"role": "assistant", "content": "yo"},
        ]
        assert convert_ai21_messages(messages, names) == [
            {"role": "system", "content": "rules\n\nBob: q"},
            {"role": "user", "content": "hi\n\nDave: there"},
            {"role": "assistant", "content": "yo"},
        ]

    def test_empty_input_gets_placeholder(self, no_names):
        assert convert_ai21_messages([], no_names) == [
            {"role": "user", "content": "Let's get started."}
        ]

    def test_non_list_input(self, no_names):
        assert convert_ai21_messages(None, no_names) == []


@pytest.mark.unit
class TestConvertMistralMessages:
    def test_sanitize_tool_id(self):
        expected = hashlib.sha512(b"call_abc").hexdigest()[:9]
        assert sanitize_tool_id("call_abc") == expected
        assert len(sanitize_tool_id("x")) == 9

    def test_tool_ids_are_hashed(self, no_names):
        messages = [
            {
                "role": "assistant",
                "content": "",
                "tool_calls": [{"id": "call_abc", "function": {"name": "f", "arguments": "{}"}}],
            },
            {"role": "tool", "tool_call_id": "call_abc", "content": "r"},
        ]
        result = convert_mistral_messages(messages, no_names, enable_prefix=False)
        assert result[0]["tool_calls"][0]["id"] == sanitize_tool_id("call_abc")
        assert result[1]["tool_call_id"] == sanitize_tool_id("call_abc")

    def test_prefix_flag(self, no_names):
        messages = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "Sure"}]
        assert convert_mistral_messages(messages, no_names, enable_prefix=True)[-1]["prefix"]
        assert "prefix" not in convert_mistral_messages(messages, no_names, enable_prefix=False)[-1]

    def test_prefix_flag_defaults_to_config(self, no_names, monkeypatch):
        from prompt_converters.core.config import Config

        monkeypatch.setenv("MISTRAL_ENABLE_PREFIX", "true")
        Config.reset_singleton()
        messages = [{"role": "assistant", "content": "Sure"}]
        assert convert_mistral_messages(messages, no_names)[-1]["prefix"] is True

    def test_user_after_tool_is_folded_into_earlier_user(self, no_names):
        messages = [
            {"role": "user", "content": "q"},
            {"role": "assistant", "content": "", "tool_calls": []},
            {"role": "tool", "tool_call_id": "t", "content": "r"},
            {"role": "user", "content": "more"},
        ]
        result = convert_mistral_messages(messages, no_names, enable_prefix=False)
        assert [m["role"] for m in result] == ["user", "assistant", "tool"]
        assert result[0]["content"] == "q\n\nmore"

    def test_system_after_assistant_becomes_user(self, no_names):
        messages = [
            {"role": "assistant", "content": "hi"},
            {"role": "system", "content": "note"},
        ]
        result = convert_mistral_messages(messages, no_names, enable_prefix=False)
        assert result[1]["role"] == "user"

    def test_names_are_inlined_and_dropped(self, names):
        messages = [
            {"role": "system", "name": "example_assistant", "content": "a"},
            {"role": "user", "name": "Dave", "content": "hi"},
        ]
        assert convert_mistral_messages(messages, names, enable_prefix=False) == [
            {"role": "system", "content": "Alice: a"},
            {"role": "user", "content": "Dave: hi"},
        ]

    def test_named_multimodal_user_turn_is_prefixed(self, names):
        messages = [
            {
                "role": "user",
                "name": "Dave",
                "content": [{"type": "text", "text": "look"}, IMAGE_PART],
            }
        ]
        assert convert_mistral_messages(messages, names, enable_prefix=False) == [
            {"role": "user", "content": [{"type": "text", "text": "Dave: look"}, IMAGE_PART]}
        ]


@pytest.mark.unit
class TestConvertXaiMessages:
    def test_name_prefixing(self, names):
        messages = [
            {"role": "assistant", "name": "Alice", "content": "hello"},
            {"role": "system", "name": "example_user", "content": "q"},
            {"role": "system", "name": "example_assistant", "content": "Carol: a"},
            {"role": "user", "name": "Dave", "content": "hi"},
            {"role": "assistant", "content": "unnamed"},
        ]
        assert convert_xai_messages(messages, names) == [
            {"role": "assistant", "content": "Alice: hello"},
            {"role": "system", "content": "Bob: q"},
            {"role": "system", "content": "Carol: a"},
            {"role": "user", "name": "Dave", "content": "hi"},
            {"role": "assistant", "content": "unnamed"},
        ]

    def test_named_multimodal_assistant_turn_is_prefixed(self, names):
        messages = [
            {
                "role": "assistant",
                "name": "Alice",
                "content": [{"type": "text", "text": "hi"}, IMAGE_PART],
            }
        ]
        assert convert_xai_messages(messages, names) == [
            {"role": "assistant", "content": [{"type": "text", "text": "Alice: hi"}, IMAGE_PART]}
        ]


@pytest.mark.unit
class TestConvertTextCompletionPrompt:
    def test_role_tagged_lines(self):
        messages = [
            {"role": "system", "content": "rules"},
            {"role": "system", "name": "example_user", "content": "q"},
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]
        assert convert_text_completion_prompt(messages) == (
            "System: rules\nexample_user: q\nuser: hi\nassistant: hello\nassistant:"
        )

    def test_string_passes_through(self):
        assert convert_text_completion_prompt("raw prompt") == "raw prompt"
