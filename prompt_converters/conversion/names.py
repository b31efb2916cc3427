"""Speaker names resolved for a single conversion.

Providers without a ``name`` field on messages get speaker labels inlined
as ``"<name>: "`` text prefixes. PromptNames carries the character, user
and group member names those prefixes are built from.
"""

import dataclasses
from collections.abc import Iterable
from typing import Any

from prompt_converters.core.constants import Constants


def has_speaker_prefix(text: str, speaker: str) -> bool:
    """Return True if ``text`` already starts with ``"<speaker>: "``."""
    return text.startswith(f"{speaker}: ")


@dataclasses.dataclass(frozen=True)
class PromptNames:
    """Names used to label speakers in provider prompts.

    Attributes:
        char_name: The active character's name.
        user_name: The user's persona name.
        group_names: Names of every member of a group chat.
    """

    char_name: str = ""
    user_name: str = ""
    group_names: tuple[str, ...] = ()

    def starts_with_group_name(self, text: str) -> bool:
        """Check if a message already starts with a group member's name prefix."""
        return any(has_speaker_prefix(text, name) for name in self.group_names)

    def should_prefix_char(self, text: str) -> bool:
        return (
            bool(self.char_name)
            and not has_speaker_prefix(text, self.char_name)
            and not self.starts_with_group_name(text)
        )

    def should_prefix_user(self, text: str) -> bool:
        return bool(self.user_name) and not has_speaker_prefix(text, self.user_name)

    def label_example(self, name: str | None, text: str) -> str:
        """Apply the example_user / example_assistant prefix rule to ``text``.

        Texts with any other name are returned unchanged.
        """
        if name == Constants.NAME_EXAMPLE_ASSISTANT and self.should_prefix_char(text):
            return f"{self.char_name}: {text}"
        if name == Constants.NAME_EXAMPLE_USER and self.should_prefix_user(text):
            return f"{self.user_name}: {text}"
        return text

    def label_turn(self, role: str, name: str, text: str) -> str:
        """Inline the speaker ``name`` of a turn into its text.

        System turns follow the example rule; other turns get a
        ``"<name>: "`` prefix unless they already carry it.
        """
        if role == Constants.ROLE_SYSTEM:
            return self.label_example(name, text)
        if has_speaker_prefix(text, name):
            return text
        return f"{name}: {text}"


def get_prompt_names(
    char_name: Any = None,
    user_name: Any = None,
    group_names: Iterable[Any] | None = None,
) -> PromptNames:
    """Resolve prompt names from caller-supplied identifiers.

    Never fails: unset names become empty strings, a missing or non-list
    group becomes empty, and every value is stringified.
    """
    if isinstance(group_names, (list, tuple)):
        groups = tuple(str(name) for name in group_names)
    else:
        groups = ()

    return PromptNames(
        char_name=str(char_name or ""),
        user_name=str(user_name or ""),
        group_names=groups,
    )
