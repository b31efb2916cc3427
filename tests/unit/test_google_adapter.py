import pytest

from prompt_converters.conversion.adapters.google import convert_google_prompt

TOOL_CALL = {"id": "c1", "function": {"name": "get_weather", "arguments": '{"city": "Paris"}'}}


@pytest.mark.unit
class TestConvertGooglePrompt:
    def test_roles_are_mapped(self, no_names):
        messages = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]
        prompt = convert_google_prompt(messages, "gemini-2.5-pro", False, no_names)
        assert prompt == {
            "contents": [
                {"role": "user", "parts": [{"text": "hi"}]},
                {"role": "model", "parts": [{"text": "hello"}]},
            ],
            "system_instruction": {"parts": []},
        }

    def test_leading_system_messages_become_system_instruction(self, names):
        messages = [
            {"role": "system", "content": "rules"},
            {"role": "system", "name": "example_assistant", "content": "sample"},
            {"role": "user", "content": "hi"},
        ]
        prompt = convert_google_prompt(messages, "gemini-2.5-pro", True, names)
        assert prompt["system_instruction"] == {
            "parts": [{"text": "rules"}, {"text": "Alice: sample"}]
        }
        assert prompt["contents"] == [{"role": "user", "parts": [{"text": "hi"}]}]

    def test_lone_system_message_stays_in_contents(self, no_names):
        prompt = convert_google_prompt(
            [{"role": "system", "content": "rules"}], "gemini-2.5-pro", True, no_names
        )
        assert prompt["system_instruction"] == {"parts": []}
        assert prompt["contents"] == [{"role": "user", "parts": [{"text": "rules"}]}]

    def test_same_role_turns_coalesce_text(self, no_names):
        messages = [
            {"role": "user", "content": "a"},
            {"role": "system", "content": "b"},
            {"role": "user", "content": ""},
        ]
        prompt = convert_google_prompt(messages, "gemini-2.5-flash", False, no_names)
        assert prompt["contents"] == [{"role": "user", "parts": [{"text": "a\n\nb"}]}]

    def test_function_call_and_response(self, no_names):
        messages = [
            {"role": "user", "content": "weather?"},
            {"role": "assistant", "content": "", "tool_calls": [TOOL_CALL]},
            {"role": "tool", "tool_call_id": "c1", "content": "sunny"},
        ]
        prompt = convert_google_prompt(messages, "gemini-2.5-flash", False, no_names)
        assert prompt["contents"] == [
            {"role": "user", "parts": [{"text": "weather?"}]},
            {
                "role": "model",
                "parts": [{"functionCall": {"name": "get_weather", "args": {"city": "Paris"}}}],
            },
            {
                "role": "user",
                "parts": [
                    {
                        "functionResponse": {
                            "name": "get_weather",
                            "response": {"name": "get_weather", "content": "sunny"},
                        }
                    }
                ],
            },
        ]

    def test_unknown_tool_call_id(self, no_names):
        messages = [{"role": "tool", "tool_call_id": "missing", "content": "r"}]
        prompt = convert_google_prompt(messages, "gemini-2.5-flash", False, no_names)
        assert prompt["contents"][0]["parts"][0]["functionResponse"]["name"] == "unknown"

    def test_inline_media(self, no_names):
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "see"},
                    {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,QUJD"}},
                    {"type": "video_url", "video_url": {"url": "data:;base64,RU5E"}},
                    {"type": "video_url", "video_url": {"url": "https://example.com/v.mp4"}},
                ],
            }
        ]
        prompt = convert_google_prompt(messages, "gemini-2.5-flash", False, no_names)
        assert prompt["contents"][0]["parts"] == [
            {"text": "see"},
            {"inlineData": {"mimeType": "image/jpeg", "data": "QUJD"}},
            {"inlineData": {"mimeType": "video/mp4", "data": "RU5E"}},
        ]

    def test_names_are_inlined(self, names):
        messages = [
            {"role": "user", "name": "Dave", "content": "hi"},
            {"role": "system", "name": "example_user", "content": "q"},
        ]
        prompt = convert_google_prompt(messages, "gemini-2.5-flash", False, names)
        assert prompt["contents"] == [{"role": "user", "parts": [{"text": "Dave: hi\n\nBob: q"}]}]
