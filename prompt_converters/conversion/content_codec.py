"""Flattening of multimodal message content to text and back.

Merging works on strings, so list content is flattened first: text parts
keep their text and every other part is swapped for a random opaque token
recorded in a caller-owned token map. After merging, ``expand_content``
splits the text on the same delimiter and swaps the tokens back for the
original parts.
"""

import base64
import copy
import secrets
from collections.abc import Callable
from typing import Any

from prompt_converters.core.constants import Constants

PART_DELIMITER = "\n\n"
TOKEN_BYTES = 32

ContentPart = dict[str, Any]
TokenMap = dict[str, ContentPart]


def new_content_token(tokens: TokenMap) -> str:
    """Generate a token not yet present in ``tokens``."""
    while True:
        token = base64.b64encode(secrets.token_bytes(TOKEN_BYTES)).decode("ascii")
        if token not in tokens:
            return token


def _part_type(part: Any) -> str | None:
    return part.get("type") if isinstance(part, dict) else None


def flatten_content(content: Any, tokens: TokenMap) -> str:
    """Render message content as a single string.

    Strings pass through unchanged. Lists are joined with a blank line:
    text parts render as their text and any other part renders as a fresh
    token, registered in ``tokens`` so it can be restored later.

    Args:
        content: A string, a list of content parts, or None.
        tokens: Token map shared by every message of one merge call.

    Returns:
        The flattened text.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return str(content)

    rendered = []
    for part in content:
        if _part_type(part) == Constants.CONTENT_TEXT:
            rendered.append(str(part.get("text", "")))
        elif isinstance(part, dict):
            token = new_content_token(tokens)
            tokens[token] = part
            rendered.append(token)
        else:
            rendered.append(str(part))
    return PART_DELIMITER.join(rendered)


def contains_token(text: Any, tokens: TokenMap) -> bool:
    """Return True if ``text`` contains any token from ``tokens``."""
    if not isinstance(text, str) or not tokens:
        return False
    return any(token in text for token in tokens)


def expand_content(text: str, tokens: TokenMap) -> list[ContentPart]:
    """Expand flattened text back into a list of content parts.

    Each delimiter-separated segment that exactly matches a token becomes a
    copy of the recorded part; all other segments are re-joined into text
    parts, so adjacent text runs collapse into one part.
    """
    parts: list[ContentPart] = []
    for segment in text.split(PART_DELIMITER):
        if segment in tokens:
            parts.append(copy.deepcopy(tokens[segment]))
        elif parts and _part_type(parts[-1]) == Constants.CONTENT_TEXT:
            parts[-1]["text"] += f"{PART_DELIMITER}{segment}"
        else:
            parts.append({"type": Constants.CONTENT_TEXT, "text": segment})
    return parts


def prepend_speaker(text: str, speaker: str, tokens: TokenMap | None = None) -> str:
    """Prefix ``text`` with ``"<speaker>: "``.

    If the text opens with a token the label becomes a segment of its own,
    otherwise the token would no longer match on expansion.
    """
    if tokens and text.split(PART_DELIMITER, 1)[0] in tokens:
        return f"{speaker}:{PART_DELIMITER}{text}"
    return f"{speaker}: {text}"


def content_to_text(content: Any) -> str:
    """Render content as plain text, dropping non-text parts."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts = [
            str(part.get("text", ""))
            for part in content
            if _part_type(part) == Constants.CONTENT_TEXT
        ]
        return PART_DELIMITER.join(texts)
    return str(content)


def relabel_first_text(
    parts: list[ContentPart], relabel: Callable[[str], str]
) -> list[ContentPart]:
    """Apply ``relabel`` to the first text part of a multimodal message.

    When there is no text part, a new one holding ``relabel("")`` is put in
    front, so a speaker label survives on image-only turns.
    """
    parts = list(parts)
    for index, part in enumerate(parts):
        if _part_type(part) == Constants.CONTENT_TEXT:
            parts[index] = {**part, "text": relabel(str(part.get("text", "")))}
            return parts

    label = relabel("").rstrip()
    if label:
        parts.insert(0, {"type": Constants.CONTENT_TEXT, "text": label})
    return parts


def as_content_parts(content: Any) -> list[ContentPart]:
    """Return content as a list of parts, wrapping strings in a text part."""
    if isinstance(content, list):
        return list(content)
    return [{"type": Constants.CONTENT_TEXT, "text": content_to_text(content)}]


def split_data_url(url: str) -> tuple[str, str]:
    """Split a ``data:<mime>;base64,<data>`` URL into its MIME type and payload."""
    header, _, data = url.partition(",")
    mime_type = header.split(";")[0].partition(":")[2]
    return mime_type, data
