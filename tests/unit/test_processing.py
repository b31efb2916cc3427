import pytest

from prompt_converters.conversion.merge import MergePolicy
from prompt_converters.conversion.processing import (
    MERGE_POLICIES,
    PromptProcessingType,
    add_assistant_prefix,
    post_process_prompt,
    resolve_processing_type,
)


@pytest.mark.unit
class TestDispatchTable:
    def test_policy_table(self):
        assert MERGE_POLICIES == {
            PromptProcessingType.MERGE: MergePolicy(),
            PromptProcessingType.CLAUDE: MergePolicy(),
            PromptProcessingType.MERGE_TOOLS: MergePolicy(tools=True),
            PromptProcessingType.SEMI: MergePolicy(strict=True),
            PromptProcessingType.SEMI_TOOLS: MergePolicy(strict=True, tools=True),
            PromptProcessingType.STRICT: MergePolicy(strict=True, placeholders=True),
            PromptProcessingType.STRICT_TOOLS: MergePolicy(
                strict=True, placeholders=True, tools=True
            ),
            PromptProcessingType.SINGLE: MergePolicy(strict=True, single=True),
        }
        assert PromptProcessingType.NONE not in MERGE_POLICIES

    def test_resolve_processing_type(self):
        assert resolve_processing_type("strict") is PromptProcessingType.STRICT
        assert resolve_processing_type(PromptProcessingType.SEMI) is PromptProcessingType.SEMI
        assert resolve_processing_type(None) is PromptProcessingType.NONE
        assert resolve_processing_type("") is PromptProcessingType.NONE
        assert resolve_processing_type("bogus") is PromptProcessingType.NONE


@pytest.mark.unit
class TestPostProcessPrompt:
    MESSAGES = [
        {"role": "user", "name": "Dave", "content": "hi"},
        {"role": "user", "content": "there"},
    ]

    def test_none_passes_through_as_copy(self, no_names):
        result = post_process_prompt(self.MESSAGES, "", no_names)
        assert result == self.MESSAGES
        assert result is not self.MESSAGES
        assert result[0] is not self.MESSAGES[0]

    def test_unknown_tag_passes_through(self, no_names):
        assert post_process_prompt(self.MESSAGES, "nope", no_names) == self.MESSAGES

    def test_merge(self, no_names):
        assert post_process_prompt(self.MESSAGES, "merge", no_names) == [
            {"role": "user", "content": "Dave: hi\n\nthere"}
        ]

    def test_claude_alias_behaves_like_merge(self, names):
        assert post_process_prompt(self.MESSAGES, "claude", names) == post_process_prompt(
            self.MESSAGES, PromptProcessingType.MERGE, names
        )

    def test_strict_adds_placeholder(self, no_names):
        result = post_process_prompt(
            [{"role": "assistant", "content": "hi"}], PromptProcessingType.STRICT, no_names
        )
        assert [m["role"] for m in result] == ["user", "assistant"]


@pytest.mark.unit
class TestAddAssistantPrefix:
    def test_flags_trailing_assistant(self):
        messages = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "Sure"}]
        result = add_assistant_prefix(messages, None, "prefix")
        assert result[-1] == {"role": "assistant", "content": "Sure", "prefix": True}
        assert "prefix" not in messages[-1]

    def test_custom_property_name(self):
        messages = [{"role": "assistant", "content": "Sure"}]
        assert add_assistant_prefix(messages, [], "partial")[-1]["partial"] is True

    def test_skipped_with_tool_definitions(self):
        messages = [{"role": "assistant", "content": "Sure"}]
        tools = [{"type": "function", "function": {"name": "f"}}]
        assert "prefix" not in add_assistant_prefix(messages, tools, "prefix")[-1]

    def test_skipped_with_tool_messages(self):
        messages = [
            {"role": "tool", "content": "r"},
            {"role": "assistant", "content": "Sure"},
        ]
        assert "prefix" not in add_assistant_prefix(messages, None, "prefix")[-1]

    def test_skipped_when_last_is_user(self):
        messages = [{"role": "user", "content": "hi"}]
        assert add_assistant_prefix(messages, None, "prefix") == messages

    def test_empty_messages(self):
        assert add_assistant_prefix([], None, "prefix") == []
